from findoc.normalization.models import (
    BankStatementRecord,
    NormalizedRecord,
    PaystubRecord,
    Transaction,
)
from findoc.normalization.normalizer import Normalizer

__all__ = [
    "BankStatementRecord",
    "NormalizedRecord",
    "Normalizer",
    "PaystubRecord",
    "Transaction",
]
