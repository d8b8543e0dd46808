class RenderError(Exception):
    """Raised when a document cannot be turned into page images."""
