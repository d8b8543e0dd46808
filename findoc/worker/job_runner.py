import threading

from findoc.config.settings import Settings
from findoc.database.models import JobRecord
from findoc.database.repositories.financial_documents_repository import (
    FinancialDocumentsRepository,
)
from findoc.database.repositories.job_repository import JobRepository
from findoc.logging.logger import Log
from findoc.processor.exceptions import DocumentNotFoundError
from findoc.processor.processor import Processor


class JobRunner:
    """Run one job, translate the pipeline outcome, and apply retry logic."""

    def __init__(
        self,
        processor: Processor,
        job_repo: JobRepository,
        doc_repo: FinancialDocumentsRepository,
        settings: Settings,
    ) -> None:
        self._processor = processor
        self._job_repo = job_repo
        self._doc_repo = doc_repo
        self._settings = settings

    def run(self, job: JobRecord, cancel_event: threading.Event | None = None) -> None:
        """Execute a single job with error handling."""
        Log.info(f"Running job {job.id} (attempt {job.attempts + 1})")
        try:
            document = self._doc_repo.find_by_id(job.document_id)
            outcome = self._processor.process(
                document.id, document.source_ref, document.kind, cancel_event=cancel_event
            )
        except DocumentNotFoundError as exc:
            self._job_repo.mark_failed(job.id, str(exc))
            Log.error(f"Job {job.id} failed: {exc}")
            return
        except Exception as exc:
            self._handle_failure(job, exc)
            return

        if outcome.success:
            self._job_repo.mark_done(job.id)
            Log.info(f"Job {job.id} completed successfully")
        elif outcome.cancelled:
            self._job_repo.release(job.id)
            Log.warning(f"Job {job.id} cancelled, returned to queue")
        else:
            self._job_repo.mark_failed(job.id, outcome.error or "unknown error")
            Log.error(f"Job {job.id} failed: {outcome.error}")

    def _handle_failure(self, job: JobRecord, exc: Exception) -> None:
        """Increment attempts; mark failed if at max, otherwise back to pending."""
        Log.error(f"Job {job.id} failed: {exc}")
        if job.attempts + 1 >= self._settings.max_job_attempts:
            self._job_repo.mark_failed(job.id, str(exc))
            self._mark_document_failed(job.document_id)
            Log.error(f"Job {job.id} permanently failed after {job.attempts + 1} attempts")
        else:
            self._job_repo.increment_attempts(job.id)
            Log.warning(f"Job {job.id} will be retried (attempt {job.attempts + 1})")

    def _mark_document_failed(self, document_id: int) -> None:
        try:
            self._doc_repo.mark_failed(document_id)
        except Exception as exc:
            Log.warning(f"Could not mark document {document_id} as failed: {exc}")
