class ExtractionError(Exception):
    """Raised when one page could not be extracted."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the vision provider call fails due to network/infrastructure issues."""
