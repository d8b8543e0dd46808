"""Converts raw extractor output into typed records.

The normalizer never raises: a value that cannot be parsed degrades to its
field default (None for paystub fields, 0.0 for statement totals) and a
transaction that cannot be dated or priced is dropped.
"""

from typing import Any

from findoc.logging.logger import Log
from findoc.normalization.models import (
    BankStatementRecord,
    NormalizedRecord,
    PaystubRecord,
    Transaction,
)
from findoc.normalization.values import (
    normalize_statement_month,
    normalize_transaction_date,
    parse_date,
    parse_money,
)

DEFAULT_CATEGORY = "Uncategorized"


class Normalizer:
    """Builds a NormalizedRecord for a document kind from a RawExtraction."""

    def __init__(self, slash_date_order: str = "MDY") -> None:
        self._slash_date_order = slash_date_order

    def normalize(self, raw: dict[str, Any], kind: str) -> NormalizedRecord:
        if not isinstance(raw, dict):
            raw = {}
        if kind == "bank_statement":
            return self.normalize_bank_statement(raw)
        return self.normalize_paystub(raw)

    def normalize_paystub(self, raw: dict[str, Any]) -> PaystubRecord:
        return PaystubRecord(
            gross_pay=parse_money(raw.get("gross_pay")),
            net_pay=parse_money(raw.get("net_pay")),
            pay_period_start=parse_date(raw.get("pay_period_start"), self._slash_date_order),
            pay_period_end=parse_date(raw.get("pay_period_end"), self._slash_date_order),
        )

    def normalize_bank_statement(self, raw: dict[str, Any]) -> BankStatementRecord:
        transactions = self._build_transactions(raw.get("transactions"))
        ending_balance = parse_money(raw.get("ending_balance"))
        if ending_balance is None:
            # Fall back to the running balance after the page's last transaction.
            ending_balance = next(
                (t.balance for t in reversed(transactions) if t.balance is not None), None
            )
        return BankStatementRecord(
            statement_month=normalize_statement_month(raw.get("statement_month")),
            total_deposits=parse_money(raw.get("total_deposits")) or 0.0,
            total_withdrawals=parse_money(raw.get("total_withdrawals")) or 0.0,
            ending_balance=ending_balance,
            transactions=transactions,
        )

    def _build_transactions(self, raw: Any) -> list[Transaction]:
        if not isinstance(raw, list):
            return []
        transactions: list[Transaction] = []
        for index, item in enumerate(raw):
            transaction = self._build_transaction(item)
            if transaction is None:
                Log.debug(f"Dropping transaction at index {index}: {item!r}")
                continue
            transactions.append(transaction)
        return transactions

    def _build_transaction(self, raw: Any) -> Transaction | None:
        if not isinstance(raw, dict):
            return None
        date = normalize_transaction_date(raw.get("date"), self._slash_date_order)
        amount = parse_money(raw.get("amount"))
        if date is None or amount is None:
            return None
        return Transaction(
            date=date,
            description=_text(raw.get("description")),
            category=_text(raw.get("category")) or DEFAULT_CATEGORY,
            amount=amount,
            balance=parse_money(raw.get("balance")),
        )


def _text(raw: Any) -> str:
    if raw is None:
        return ""
    return str(raw).strip()
