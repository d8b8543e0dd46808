from collections.abc import Sequence

from findoc.normalization.models import PaystubRecord
from findoc.processor.exceptions import NoUsableDataError


class ConfidenceSelector:
    """Picks the densest paystub page.

    Score is the number of non-null fields. Ties go to the earliest page.
    """

    FIELDS: tuple[str, ...] = ("gross_pay", "net_pay", "pay_period_start", "pay_period_end")

    @classmethod
    def score(cls, record: PaystubRecord) -> int:
        return sum(1 for name in cls.FIELDS if getattr(record, name) is not None)

    def select_index(self, records: Sequence[PaystubRecord]) -> int:
        """Return the index of the winning record.

        Raises:
            NoUsableDataError: if there are no records or every record scored 0.
        """
        best_index = -1
        best_score = 0
        for index, record in enumerate(records):
            record_score = self.score(record)
            if record_score > best_score:
                best_index, best_score = index, record_score
        if best_index < 0:
            raise NoUsableDataError(
                f"No paystub fields could be extracted from {len(records)} page(s)"
            )
        return best_index

    def select(self, records: Sequence[PaystubRecord]) -> PaystubRecord:
        return records[self.select_index(records)]
