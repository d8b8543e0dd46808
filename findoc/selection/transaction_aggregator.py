"""Folds per-page bank statement records into one canonical record.

Each field has its own reducer:

- statement_month: first non-null value in page order
- total_deposits / total_withdrawals: summed over pages with transactions
- ending_balance: last non-null value in page order
- transactions: concatenated in page order, then stably sorted by date
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from functools import reduce

from findoc.normalization.models import BankStatementRecord, Transaction


@dataclass
class StatementAccumulator:
    statement_month: str | None = None
    total_deposits: float = 0.0
    total_withdrawals: float = 0.0
    ending_balance: float | None = None
    transactions: list[Transaction] = field(default_factory=list)


Reducer = Callable[[StatementAccumulator, BankStatementRecord], None]


def reduce_statement_month(acc: StatementAccumulator, page: BankStatementRecord) -> None:
    if acc.statement_month is None and page.statement_month:
        acc.statement_month = page.statement_month


def reduce_totals(acc: StatementAccumulator, page: BankStatementRecord) -> None:
    # Summary pages without transactions would otherwise double-count.
    if not page.transactions:
        return
    acc.total_deposits += page.total_deposits
    acc.total_withdrawals += page.total_withdrawals


def reduce_ending_balance(acc: StatementAccumulator, page: BankStatementRecord) -> None:
    if page.ending_balance is not None:
        acc.ending_balance = page.ending_balance


def reduce_transactions(acc: StatementAccumulator, page: BankStatementRecord) -> None:
    acc.transactions.extend(page.transactions)


class TransactionAggregator:
    """Aggregates bank statement pages. Records must be in page order."""

    REDUCERS: tuple[Reducer, ...] = (
        reduce_statement_month,
        reduce_totals,
        reduce_ending_balance,
        reduce_transactions,
    )

    def aggregate(self, records: Sequence[BankStatementRecord]) -> BankStatementRecord:
        acc = reduce(self._fold, records, StatementAccumulator())
        return BankStatementRecord(
            statement_month=acc.statement_month,
            total_deposits=acc.total_deposits,
            total_withdrawals=acc.total_withdrawals,
            ending_balance=acc.ending_balance if acc.ending_balance is not None else 0.0,
            transactions=sorted(acc.transactions, key=lambda t: t.date),
        )

    def _fold(
        self, acc: StatementAccumulator, page: BankStatementRecord
    ) -> StatementAccumulator:
        for reducer in self.REDUCERS:
            reducer(acc, page)
        return acc
