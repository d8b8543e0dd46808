from findoc.selection.confidence_selector import ConfidenceSelector
from findoc.selection.transaction_aggregator import TransactionAggregator

__all__ = ["ConfidenceSelector", "TransactionAggregator"]
