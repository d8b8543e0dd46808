from dataclasses import asdict, dataclass, field
from datetime import date


@dataclass(frozen=True)
class PaystubRecord:
    """Typed paystub fields for one page or one document."""

    gross_pay: float | None = None
    net_pay: float | None = None
    pay_period_start: date | None = None
    pay_period_end: date | None = None

    def to_payload(self) -> dict[str, object]:
        return {
            "gross_pay": self.gross_pay,
            "net_pay": self.net_pay,
            "pay_period_start": _iso(self.pay_period_start),
            "pay_period_end": _iso(self.pay_period_end),
        }


@dataclass(frozen=True)
class Transaction:
    """A single ledger line. Negative amounts are expenses."""

    date: str
    description: str = ""
    category: str = "Uncategorized"
    amount: float = 0.0
    balance: float | None = None


@dataclass(frozen=True)
class BankStatementRecord:
    """Typed bank statement fields for one page or one document.

    ending_balance is None on a page that did not report a balance.
    """

    statement_month: str | None = None
    total_deposits: float = 0.0
    total_withdrawals: float = 0.0
    ending_balance: float | None = None
    transactions: list[Transaction] = field(default_factory=list)

    def to_payload(self) -> dict[str, object]:
        return {
            "statement_month": self.statement_month,
            "total_deposits": self.total_deposits,
            "total_withdrawals": self.total_withdrawals,
            "ending_balance": self.ending_balance,
            "transactions": [asdict(t) for t in self.transactions],
        }


NormalizedRecord = PaystubRecord | BankStatementRecord


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None
