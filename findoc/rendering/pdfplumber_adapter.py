import io

import pdfplumber
from pdfplumber.page import Page

from findoc.rendering.base import BasePageRenderer
from findoc.rendering.exceptions import RenderError
from findoc.rendering.models import PageImage


class PdfPlumberRenderer(BasePageRenderer):
    """Renders PDF pages to PNG using pdfplumber (pypdfium2 backend)."""

    def _render_pdf(self, pdf_bytes: bytes) -> list[PageImage]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return [
                    PageImage(page_number=index, content=self._to_png(page))
                    for index, page in enumerate(pdf.pages, start=1)
                ]
        except RenderError:
            raise
        except Exception as exc:
            raise RenderError(f"pdfplumber rendering failed: {exc}") from exc

    def _to_png(self, page: Page) -> bytes:
        buf = io.BytesIO()
        page.to_image(resolution=self._dpi).original.save(buf, format="PNG")
        return buf.getvalue()
