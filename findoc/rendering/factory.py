from findoc.config.settings import Settings
from findoc.rendering.base import BasePageRenderer
from findoc.rendering.pdfplumber_adapter import PdfPlumberRenderer
from findoc.rendering.pymupdf_adapter import PyMuPdfRenderer


class RendererFactory:
    """Creates the correct page renderer based on settings."""

    ADAPTERS: dict[str, type[BasePageRenderer]] = {
        "pdfplumber": PdfPlumberRenderer,
        "pymupdf": PyMuPdfRenderer,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePageRenderer:
        engine = settings.render_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown render engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls(dpi=settings.render_dpi)
