import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from findoc.normalization.models import NormalizedRecord
from findoc.processor.exceptions import InvalidTransitionError, PipelineCancelledError
from findoc.processor.models import TRANSITIONS, DocumentKind, PageOutcome, PipelineState
from findoc.rendering.models import PageImage


@dataclass(slots=True)
class PipelineContext:
    document_id: int
    source_ref: str
    kind: DocumentKind
    cancel_event: threading.Event | None = None
    state: PipelineState = PipelineState.PENDING
    raw_bytes: bytes = b""
    pages: list[PageImage] = field(default_factory=list)
    page_outcomes: list[PageOutcome] = field(default_factory=list)
    candidates: list[NormalizedRecord] = field(default_factory=list)
    result: NormalizedRecord | None = None
    error_message: str = ""

    def transition(self, target: PipelineState) -> None:
        if target not in TRANSITIONS[self.state]:
            raise InvalidTransitionError(
                f"Document {self.document_id}: cannot move from {self.state} to {target}"
            )
        self.state = target

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise PipelineCancelledError(f"Document {self.document_id} run was cancelled")

    @property
    def page_errors(self) -> dict[int, str]:
        return {
            outcome.page_number: outcome.error or ""
            for outcome in self.page_outcomes
            if not outcome.succeeded
        }


class PipelineStep(ABC):
    state: PipelineState

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
