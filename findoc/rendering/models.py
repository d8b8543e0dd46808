import base64
from dataclasses import dataclass


@dataclass(frozen=True)
class PageImage:
    """One rendered page. page_number is 1-indexed."""

    page_number: int
    content: bytes
    mime_type: str = "image/png"

    @property
    def data_url(self) -> str:
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"

    @property
    def extension(self) -> str:
        return self.mime_type.split("/")[-1]
