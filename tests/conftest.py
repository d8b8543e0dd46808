import io

import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Gross Pay $1,234.56")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page statement-like PDF."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "01/10/2024 Coffee -50.00 950.00")
    c.showPage()
    c.drawString(72, 720, "01/20/2024 Payroll 200.00 1150.00")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    """A small PNG image, as uploaded for a single-page paystub."""
    buf = io.BytesIO()
    Image.new("RGB", (40, 20), color="white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def tiff_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (40, 20), color="white").save(buf, format="TIFF")
    return buf.getvalue()
