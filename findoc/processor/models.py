from dataclasses import dataclass, field
from enum import StrEnum

from findoc.normalization.models import NormalizedRecord


class DocumentKind(StrEnum):
    PAYSTUB = "paystub"
    BANK_STATEMENT = "bank_statement"


class DocumentStatus(StrEnum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class PipelineState(StrEnum):
    PENDING = "pending"
    RENDERING = "rendering"
    EXTRACTING = "extracting"
    NORMALIZING = "normalizing"
    SELECTING = "selecting"
    AGGREGATING = "aggregating"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"
    CANCELLED = "cancelled"


TERMINAL_STATES = frozenset(
    {PipelineState.DONE, PipelineState.FAILED, PipelineState.CANCELLED}
)

# FAILED is reachable from RENDERING and SELECTING/AGGREGATING, and from
# EXTRACTING when the vision client reports missing credentials.
TRANSITIONS: dict[PipelineState, frozenset[PipelineState]] = {
    PipelineState.PENDING: frozenset({PipelineState.RENDERING, PipelineState.CANCELLED}),
    PipelineState.RENDERING: frozenset(
        {PipelineState.EXTRACTING, PipelineState.FAILED, PipelineState.CANCELLED}
    ),
    PipelineState.EXTRACTING: frozenset(
        {PipelineState.NORMALIZING, PipelineState.FAILED, PipelineState.CANCELLED}
    ),
    PipelineState.NORMALIZING: frozenset(
        {PipelineState.SELECTING, PipelineState.AGGREGATING, PipelineState.CANCELLED}
    ),
    PipelineState.SELECTING: frozenset(
        {PipelineState.PERSISTING, PipelineState.FAILED, PipelineState.CANCELLED}
    ),
    PipelineState.AGGREGATING: frozenset(
        {PipelineState.PERSISTING, PipelineState.FAILED, PipelineState.CANCELLED}
    ),
    PipelineState.PERSISTING: frozenset({PipelineState.DONE}),
    PipelineState.DONE: frozenset(),
    PipelineState.FAILED: frozenset(),
    PipelineState.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class FinancialDocument:
    """Domain model for an uploaded financial document (subset of DB columns)."""

    id: int
    kind: DocumentKind
    source_ref: str
    status: DocumentStatus = DocumentStatus.PENDING


@dataclass(frozen=True)
class PageOutcome:
    """Result of extracting and normalizing one page."""

    page_number: int
    record: NormalizedRecord | None = None
    error: str | None = None
    attempts: int = 1

    @property
    def succeeded(self) -> bool:
        return self.record is not None


@dataclass
class PipelineOutcome:
    """Value returned to the caller of a one-shot document run."""

    document_id: int
    success: bool
    state: PipelineState
    result: NormalizedRecord | None = None
    error: str | None = None
    cancelled: bool = False
    page_errors: dict[int, str] = field(default_factory=dict)
