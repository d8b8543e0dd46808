import io
from abc import ABC, abstractmethod
from typing import ClassVar

from PIL import Image, UnidentifiedImageError

from findoc.rendering.exceptions import RenderError
from findoc.rendering.models import PageImage


class BasePageRenderer(ABC):
    """Contract for all page rendering adapters.

    Subclasses only rasterize PDFs; image uploads are passed through here.
    """

    PASSTHROUGH_FORMATS: ClassVar[dict[str, str]] = {
        "PNG": "image/png",
        "JPEG": "image/jpeg",
        "WEBP": "image/webp",
        "GIF": "image/gif",
    }

    def __init__(self, dpi: int = 200) -> None:
        self._dpi = dpi

    def render(self, document_bytes: bytes) -> list[PageImage]:
        """Render a document into ordered page images.

        Raises:
            RenderError: if the input is empty, unsupported, corrupt or has no pages.
        """
        if not document_bytes:
            raise RenderError("Document is empty")
        if self.is_pdf(document_bytes):
            pages = self._render_pdf(document_bytes)
            if not pages:
                raise RenderError("PDF has no pages")
            return pages
        return [self._image_page(document_bytes)]

    @staticmethod
    def is_pdf(document_bytes: bytes) -> bool:
        return b"%PDF" in document_bytes[:1024]

    @abstractmethod
    def _render_pdf(self, pdf_bytes: bytes) -> list[PageImage]:
        """Rasterize every page of a PDF to PNG, in page order.

        Raises:
            RenderError: if rendering fails for any reason.
        """

    def _image_page(self, image_bytes: bytes) -> PageImage:
        try:
            with Image.open(io.BytesIO(image_bytes)) as image:
                image_format = image.format or ""
                mime_type = self.PASSTHROUGH_FORMATS.get(image_format)
                if mime_type is not None:
                    return PageImage(page_number=1, content=image_bytes, mime_type=mime_type)
                buf = io.BytesIO()
                image.convert("RGB").save(buf, format="PNG")
        except (UnidentifiedImageError, OSError) as exc:
            raise RenderError(f"Unsupported document format: {exc}") from exc
        return PageImage(page_number=1, content=buf.getvalue())
