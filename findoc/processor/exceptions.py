class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class DocumentNotFoundError(ProcessorError):
    """Raised when a document cannot be found in the database."""


class ConfigError(ProcessorError):
    """Raised when a required backend setting or credential is missing."""


class NoUsableDataError(ProcessorError):
    """Raised when no page of a document produced usable data."""


class PipelineCancelledError(ProcessorError):
    """Raised when the caller cancels a document run."""


class InvalidTransitionError(ProcessorError):
    """Raised when the pipeline attempts an undefined state transition."""
