import threading
from pathlib import Path

from findoc.config.settings import Settings
from findoc.database.repositories.financial_documents_repository import (
    FinancialDocumentsRepository,
)
from findoc.extraction.factory import ExtractorFactory
from findoc.logging.logger import Log
from findoc.normalization.normalizer import Normalizer
from findoc.processor.exceptions import (
    ConfigError,
    NoUsableDataError,
    PipelineCancelledError,
)
from findoc.processor.models import DocumentKind, PipelineOutcome, PipelineState
from findoc.processor.page_runner import PageRunner
from findoc.processor.pipeline import PipelineContext, PipelineStep
from findoc.processor.steps import (
    AggregateStatementStep,
    CollectCandidatesStep,
    ExtractPagesStep,
    MarkFailedStep,
    PersistResultStep,
    RenderPagesStep,
    SelectPaystubStep,
)
from findoc.rendering.exceptions import RenderError
from findoc.rendering.factory import RendererFactory
from findoc.selection.confidence_selector import ConfidenceSelector
from findoc.selection.transaction_aggregator import TransactionAggregator
from findoc.storage.local_adapter import LocalBlobStore

FATAL_ERRORS = (RenderError, NoUsableDataError, ConfigError)


class Processor:
    """Orchestrates the document extraction pipeline.

    Pipeline: render -> extract -> normalize -> select | aggregate -> persist.
    Each step is bound to a PipelineState; the context validates every
    transition. Fatal errors end in FAILED and are reported through the
    returned PipelineOutcome, never raised.
    """

    def __init__(
        self,
        steps: dict[DocumentKind, list[PipelineStep]],
        failed_step: PipelineStep,
    ) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def process(
        self,
        document_id: int,
        source_ref: str,
        kind: DocumentKind | str,
        cancel_event: threading.Event | None = None,
    ) -> PipelineOutcome:
        """Run the full pipeline for one document."""
        context = PipelineContext(
            document_id=document_id,
            source_ref=source_ref,
            kind=DocumentKind(kind),
            cancel_event=cancel_event,
        )
        Log.info(f"Processing {context.kind} document {document_id} from {source_ref}")

        try:
            for step in self._steps[context.kind]:
                context.raise_if_cancelled()
                context.transition(step.state)
                step.run(context)
            context.transition(PipelineState.DONE)
        except PipelineCancelledError as exc:
            context.transition(PipelineState.CANCELLED)
            Log.warning(f"Document {document_id}: {exc}; nothing persisted")
            return self._outcome(context, error=str(exc), cancelled=True)
        except FATAL_ERRORS as exc:
            context.error_message = str(exc)
            context.transition(PipelineState.FAILED)
            self._failed_step.run(context)
            return self._outcome(context, error=context.error_message)

        Log.info(f"Document {document_id} completed")
        return self._outcome(context)

    @staticmethod
    def _outcome(
        context: PipelineContext,
        error: str | None = None,
        cancelled: bool = False,
    ) -> PipelineOutcome:
        success = context.state == PipelineState.DONE
        return PipelineOutcome(
            document_id=context.document_id,
            success=success,
            state=context.state,
            result=context.result if success else None,
            error=error,
            cancelled=cancelled,
            page_errors=context.page_errors,
        )


def build_processor(
    settings: Settings,
    storage_root: Path | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    blob_store = LocalBlobStore(
        root=storage_root if storage_root is not None else Path(settings.storage_root)
    )
    doc_repo = FinancialDocumentsRepository()
    page_runner = PageRunner(
        extractor=ExtractorFactory.create(settings),
        normalizer=Normalizer(slash_date_order=settings.slash_date_order),
        max_workers=settings.extraction_max_workers,
        retry_attempts=settings.page_retry_attempts,
    )
    head: list[PipelineStep] = [
        RenderPagesStep(
            blob_store=blob_store,
            renderer=RendererFactory.create(settings),
            store_page_images=settings.store_page_images,
        ),
        ExtractPagesStep(page_runner=page_runner),
        CollectCandidatesStep(),
    ]
    persist = PersistResultStep(doc_repo=doc_repo)
    steps: dict[DocumentKind, list[PipelineStep]] = {
        DocumentKind.PAYSTUB: [*head, SelectPaystubStep(ConfidenceSelector()), persist],
        DocumentKind.BANK_STATEMENT: [
            *head,
            AggregateStatementStep(TransactionAggregator()),
            persist,
        ],
    }
    return Processor(steps=steps, failed_step=MarkFailedStep(doc_repo))
