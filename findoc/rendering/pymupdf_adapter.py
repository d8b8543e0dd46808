import pymupdf

from findoc.rendering.base import BasePageRenderer
from findoc.rendering.exceptions import RenderError
from findoc.rendering.models import PageImage


class PyMuPdfRenderer(BasePageRenderer):
    """Renders PDF pages to PNG using PyMuPDF."""

    def _render_pdf(self, pdf_bytes: bytes) -> list[PageImage]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return [
                    PageImage(
                        page_number=index,
                        content=page.get_pixmap(dpi=self._dpi).tobytes("png"),
                    )
                    for index, page in enumerate(doc, start=1)
                ]
        except RenderError:
            raise
        except Exception as exc:
            raise RenderError(f"pymupdf rendering failed: {exc}") from exc
