from findoc.extraction.exceptions import ExtractionError, ExtractionNetworkError
from findoc.extraction.extractor import FieldExtractor
from findoc.extraction.factory import ExtractorFactory

__all__ = ["ExtractionError", "ExtractionNetworkError", "ExtractorFactory", "FieldExtractor"]
