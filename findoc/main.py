import signal
from types import FrameType

from findoc.config.settings import Settings
from findoc.database.connection import close_pool, init_pool
from findoc.database.repositories.financial_documents_repository import (
    FinancialDocumentsRepository,
)
from findoc.database.repositories.job_repository import JobRepository
from findoc.logging.logger import Log
from findoc.processor.processor import build_processor
from findoc.worker.job_runner import JobRunner
from findoc.worker.worker import Worker


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> start worker loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        processor = build_processor(settings)
        job_repo = JobRepository(settings.max_job_attempts)
        job_runner = JobRunner(processor, job_repo, FinancialDocumentsRepository(), settings)
        worker = Worker(job_repo, job_runner, settings)

        def _handle_sigterm(signum: int, frame: FrameType | None) -> None:
            Log.info(f"Received signal {signum}, stopping worker")
            worker.stop()

        signal.signal(signal.SIGTERM, _handle_sigterm)
        worker.run()
    finally:
        close_pool()


if __name__ == "__main__":
    main()
