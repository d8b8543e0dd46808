from typing import cast

from findoc.database.repositories.financial_documents_repository import (
    FinancialDocumentsRepository,
)
from findoc.logging.logger import Log
from findoc.normalization.models import BankStatementRecord, PaystubRecord
from findoc.processor.exceptions import NoUsableDataError
from findoc.processor.models import DocumentKind, PipelineState
from findoc.processor.page_runner import PageRunner
from findoc.processor.pipeline import PipelineContext, PipelineStep
from findoc.rendering.base import BasePageRenderer
from findoc.rendering.exceptions import RenderError
from findoc.selection.confidence_selector import ConfidenceSelector
from findoc.selection.transaction_aggregator import TransactionAggregator
from findoc.storage.base import BaseBlobStore
from findoc.storage.exceptions import BlobStoreError


class RenderPagesStep(PipelineStep):
    state = PipelineState.RENDERING

    def __init__(
        self,
        blob_store: BaseBlobStore,
        renderer: BasePageRenderer,
        store_page_images: bool = False,
    ) -> None:
        self._blob_store = blob_store
        self._renderer = renderer
        self._store_page_images = store_page_images

    def run(self, context: PipelineContext) -> PipelineContext:
        try:
            context.raw_bytes = self._blob_store.fetch(context.source_ref)
        except BlobStoreError as exc:
            raise RenderError(f"Source document unavailable: {exc}") from exc
        Log.info(
            f"Loaded {len(context.raw_bytes)} bytes for document {context.document_id}"
        )
        context.pages = self._renderer.render(context.raw_bytes)
        Log.info(f"Rendered {len(context.pages)} page(s) for document {context.document_id}")
        if self._store_page_images:
            self._store_pages(context)
        return context

    def _store_pages(self, context: PipelineContext) -> None:
        for page in context.pages:
            ref = f"pages/{context.document_id}/{page.page_number}.{page.extension}"
            try:
                self._blob_store.put(ref, page.content)
            except BlobStoreError as exc:
                Log.warning(f"Could not store page image {ref}: {exc}")


class ExtractPagesStep(PipelineStep):
    state = PipelineState.EXTRACTING

    def __init__(self, page_runner: PageRunner) -> None:
        self._page_runner = page_runner

    def run(self, context: PipelineContext) -> PipelineContext:
        context.page_outcomes = self._page_runner.run(
            context.pages,
            context.kind,
            cancel_event=context.cancel_event,
        )
        return context


class CollectCandidatesStep(PipelineStep):
    state = PipelineState.NORMALIZING

    def run(self, context: PipelineContext) -> PipelineContext:
        context.candidates = []
        for outcome in context.page_outcomes:
            if outcome.record is None:
                Log.warning(
                    f"Document {context.document_id} page {outcome.page_number} "
                    f"excluded after {outcome.attempts} attempt(s): {outcome.error}"
                )
                continue
            context.candidates.append(outcome.record)
        Log.info(
            f"Document {context.document_id}: {len(context.candidates)} of "
            f"{len(context.page_outcomes)} page(s) usable"
        )
        return context


class SelectPaystubStep(PipelineStep):
    state = PipelineState.SELECTING

    def __init__(self, selector: ConfidenceSelector) -> None:
        self._selector = selector

    def run(self, context: PipelineContext) -> PipelineContext:
        records = cast(list[PaystubRecord], context.candidates)
        index = self._selector.select_index(records)
        context.result = records[index]
        Log.info(
            f"Selected paystub candidate {index + 1} of {len(records)} for document "
            f"{context.document_id} (score {self._selector.score(records[index])})"
        )
        return context


class AggregateStatementStep(PipelineStep):
    state = PipelineState.AGGREGATING

    def __init__(self, aggregator: TransactionAggregator) -> None:
        self._aggregator = aggregator

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.candidates:
            raise NoUsableDataError(
                f"No page of document {context.document_id} could be extracted"
            )
        records = cast(list[BankStatementRecord], context.candidates)
        result = self._aggregator.aggregate(records)
        context.result = result
        Log.info(
            f"Aggregated {len(result.transactions)} transaction(s) from "
            f"{len(records)} page(s) for document {context.document_id}"
        )
        return context


class PersistResultStep(PipelineStep):
    state = PipelineState.PERSISTING

    def __init__(self, doc_repo: FinancialDocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.result is None:
            raise ValueError("PipelineContext.result must be set before persist")
        if context.kind == DocumentKind.PAYSTUB:
            self._doc_repo.save_paystub_result(
                context.document_id, cast(PaystubRecord, context.result)
            )
        else:
            self._doc_repo.save_bank_statement_result(
                context.document_id, cast(BankStatementRecord, context.result)
            )
        Log.info(f"Persisted result for document {context.document_id}")
        return context


class MarkFailedStep(PipelineStep):
    state = PipelineState.FAILED

    def __init__(self, doc_repo: FinancialDocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._doc_repo.mark_failed(context.document_id)
        Log.error(
            f"Document {context.document_id} marked as failed: {context.error_message}"
        )
        return context
