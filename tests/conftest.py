import io
import sys
from pathlib import Path

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

sys.path.append(str(Path(__file__).parents[1] / "src"))

from statement_parser.parsers.extractor import DocumentViews, TextLine

PAGE_WIDTH, PAGE_HEIGHT = letter

# Minimal statement text for an HDFC card
HDFC_TEXT = (
    "HDFC BANK\n"
    "Card Number: XXXX XXXX XXXX 4321\n"
    "Payment Due Date: 15-Jan-2024\n"
    "Total Amount Due: Rs. 12,345.67\n"
)

# (x, distance from top of page, text) for a full HDFC statement page
HDFC_PAGE = [
    (50, 40, "HDFC BANK Credit Card Statement"),
    (50, 70, "Name: Rahul Mehta"),
    (50, 100, "Card Type: Regalia"),
    (50, 120, "Statement Date: 01-Jan-2024"),
    (50, 170, "Card Number: XXXX XXXX XXXX 4321"),
    (50, 190, "Payment Due Date: 15-Jan-2024"),
    (50, 210, "Total Amount Due: Rs. 12,345.67"),
    (50, 230, "Minimum Amount Due: Rs. 617.28"),
    (50, 250, "Credit Limit: Rs. 2,00,000.00"),
    (50, 270, "Available Credit Limit: Rs. 1,87,654.33"),
    (50, 320, "Date"),
    (200, 320, "Description"),
    (450, 320, "Amount"),
    (50, 340, "05-Dec-2023"),
    (200, 340, "Grocery Store"),
    (450, 340, "Rs. 540.00"),
    (50, 360, "12-Dec-2023"),
    (200, 360, "Amazon India"),
    (450, 360, "Rs. 1,299.00"),
    (50, 380, "20-Dec-2023"),
    (200, 380, "Payment Received"),
    (450, 380, "Rs. 5,000.00 Cr"),
]


def build_pdf(
    pages: list[list[tuple[float, float, str]]],
    password: str | None = None,
    font_size: float = 10,
) -> bytes:
    """Render text items onto letter-size pages and return the PDF bytes.

    Args:
        pages: One list of (x, top, text) items per page
        password: Optional user password (encrypts the PDF)
        font_size: Helvetica size for every item
    """
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=letter, encrypt=password)
    for items in pages:
        pdf.setFont("Helvetica", font_size)
        for x, top, text in items:
            pdf.drawString(x, PAGE_HEIGHT - top, text)
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


@pytest.fixture
def pdf_builder():
    """Factory fixture for building statement PDFs."""
    return build_pdf


@pytest.fixture
def hdfc_pdf() -> bytes:
    """A one-page HDFC statement with a summary box and a transaction table."""
    return build_pdf([HDFC_PAGE])


@pytest.fixture
def encrypted_hdfc_pdf() -> bytes:
    """The HDFC statement encrypted with the user password "secret"."""
    return build_pdf([HDFC_PAGE], password="secret")


@pytest.fixture
def unknown_pdf() -> bytes:
    """A readable PDF with no issuer markers."""
    return build_pdf([[(50, 40, "Quarterly Newsletter"), (50, 60, "Nothing to see here")]])


@pytest.fixture
def hdfc_views() -> DocumentViews:
    """Text-only views of the minimal HDFC statement."""
    return DocumentViews(text=HDFC_TEXT)


@pytest.fixture
def table_lines() -> tuple[TextLine, ...]:
    """Positioned lines for a header row and one transaction row."""
    return (
        TextLine(text="Date", x=50, y=320, font_size=10),
        TextLine(text="Description", x=200, y=320, font_size=10),
        TextLine(text="Amount", x=450, y=320, font_size=10),
        TextLine(text="Rs. 540.00", x=450, y=340.5, font_size=10),
        TextLine(text="01-Feb-2024", x=50, y=340, font_size=10),
        TextLine(text="Grocery Store", x=200, y=341, font_size=10),
    )
