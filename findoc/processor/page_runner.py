"""Fan-out/fan-in of per-page extraction.

Pages are extracted and normalized on a bounded thread pool. Outcomes are
collected by page number and returned in page order, since the selector and
aggregator depend on page order rather than completion order.
"""

import threading
from collections.abc import Sequence
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait

from findoc.extraction.exceptions import ExtractionError
from findoc.extraction.extractor import FieldExtractor
from findoc.logging.logger import Log
from findoc.normalization.normalizer import Normalizer
from findoc.processor.exceptions import PipelineCancelledError
from findoc.processor.models import PageOutcome
from findoc.rendering.models import PageImage


class PageRunner:
    """Runs extract -> normalize for every page of one document."""

    CANCEL_POLL_SECONDS = 0.5

    def __init__(
        self,
        extractor: FieldExtractor,
        normalizer: Normalizer,
        max_workers: int = 4,
        retry_attempts: int = 1,
    ) -> None:
        self._extractor = extractor
        self._normalizer = normalizer
        self._max_workers = max(1, max_workers)
        self._retry_attempts = max(0, retry_attempts)

    def run(
        self,
        pages: Sequence[PageImage],
        kind: str,
        cancel_event: threading.Event | None = None,
    ) -> list[PageOutcome]:
        """Process all pages and return their outcomes sorted by page number.

        Raises:
            PipelineCancelledError: if cancel_event is set before all pages finish.
        """
        outcomes: dict[int, PageOutcome] = {}
        executor = ThreadPoolExecutor(
            max_workers=min(self._max_workers, max(1, len(pages))),
            thread_name_prefix="page",
        )
        try:
            pending: set[Future[PageOutcome]] = {
                executor.submit(self.process_page, page, kind, cancel_event) for page in pages
            }
            while pending:
                if cancel_event is not None and cancel_event.is_set():
                    raise PipelineCancelledError("Page extraction cancelled")
                done, pending = wait(
                    pending, timeout=self.CANCEL_POLL_SECONDS, return_when=FIRST_COMPLETED
                )
                for future in done:
                    outcome = future.result()
                    outcomes[outcome.page_number] = outcome
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
        return [outcomes[number] for number in sorted(outcomes)]

    def process_page(
        self,
        page: PageImage,
        kind: str,
        cancel_event: threading.Event | None = None,
    ) -> PageOutcome:
        """Extract and normalize one page, retrying extraction failures.

        Only ExtractionError is recovered here; anything else propagates.
        """
        max_attempts = 1 + self._retry_attempts
        error = ""
        for attempt in range(1, max_attempts + 1):
            if cancel_event is not None and cancel_event.is_set():
                return PageOutcome(page.page_number, error="cancelled", attempts=attempt - 1)
            try:
                raw = self._extractor.extract(page, kind)
            except ExtractionError as exc:
                error = str(exc)
                Log.warning(
                    f"Page {page.page_number} extraction failed "
                    f"(attempt {attempt}/{max_attempts}): {error}"
                )
                continue
            record = self._normalizer.normalize(raw, kind)
            Log.debug(f"Page {page.page_number} normalized: {record}")
            return PageOutcome(page.page_number, record=record, attempts=attempt)
        return PageOutcome(page.page_number, error=error, attempts=max_attempts)
