"""Tests for PDF text extraction."""

import io

import pytest
from pypdf import PdfWriter

from statement_parser.core.exceptions import InvalidDocumentError
from statement_parser.parsers.extractor import PDFExtractor, TextLine, group_rows


@pytest.fixture
def extractor() -> PDFExtractor:
    return PDFExtractor()


@pytest.fixture
def empty_pdf() -> bytes:
    """A structurally valid PDF with no pages."""
    buffer = io.BytesIO()
    PdfWriter().write(buffer)
    return buffer.getvalue()


class TestValidate:
    """Test suite for PDFExtractor.validate."""

    def test_valid_pdf(self, extractor, hdfc_pdf):
        """Test a readable PDF passes."""
        extractor.validate(hdfc_pdf)
        assert extractor.is_valid_document(hdfc_pdf)

    @pytest.mark.parametrize("document", [b"", b"not a pdf at all"])
    def test_unreadable(self, extractor, document):
        """Test empty and corrupt input is rejected."""
        with pytest.raises(InvalidDocumentError) as exc_info:
            extractor.validate(document)
        assert exc_info.value.error_code == "PARSE_002"
        assert not extractor.is_valid_document(document)

    def test_no_pages(self, extractor, empty_pdf):
        """Test a PDF without pages is rejected."""
        with pytest.raises(InvalidDocumentError) as exc_info:
            extractor.validate(empty_pdf)
        assert exc_info.value.error_code == "PARSE_006"

    def test_missing_file(self, extractor, tmp_path):
        """Test a path that does not exist is unreadable."""
        with pytest.raises(InvalidDocumentError) as exc_info:
            extractor.validate(tmp_path / "missing.pdf")
        assert exc_info.value.error_code == "PARSE_002"


class TestEncryptedDocuments:
    """Test suite for password-protected PDFs."""

    @pytest.fixture
    def encrypted_pdf(self, pdf_builder) -> bytes:
        return pdf_builder([[(50, 40, "HDFC BANK Credit Card Statement")]], password="secret")

    def test_password_required(self, extractor, encrypted_pdf):
        """Test an encrypted PDF without a password."""
        with pytest.raises(InvalidDocumentError) as exc_info:
            extractor.validate(encrypted_pdf)
        assert exc_info.value.error_code == "PARSE_003"

    def test_wrong_password(self, extractor, encrypted_pdf):
        """Test an encrypted PDF with the wrong password."""
        with pytest.raises(InvalidDocumentError) as exc_info:
            extractor.validate(encrypted_pdf, password="wrong")
        assert exc_info.value.error_code == "PARSE_004"

    def test_correct_password(self, extractor, encrypted_pdf):
        """Test the right password validates and extracts."""
        extractor.validate(encrypted_pdf, password="secret")
        assert "HDFC BANK" in extractor.extract_text(encrypted_pdf, password="secret")


class TestTextViews:
    """Test suite for the text views of a statement page."""

    def test_linear_text(self, extractor, hdfc_pdf):
        """Test every summary line is present in reading order."""
        text = extractor.extract_text(hdfc_pdf)

        assert "Card Number: XXXX XXXX XXXX 4321" in text
        assert text.index("Statement Date") < text.index("Payment Due Date")

    def test_path_input(self, extractor, hdfc_pdf, tmp_path):
        """Test paths are accepted as well as bytes."""
        path = tmp_path / "statement.pdf"
        path.write_bytes(hdfc_pdf)

        assert "HDFC BANK" in extractor.extract_text(path)
        assert "HDFC BANK" in extractor.extract_text(str(path))

    def test_layout_text_marks_column_gaps(self, extractor, hdfc_pdf):
        """Test wide gaps between columns become tabs."""
        layout = extractor.extract_layout_text(hdfc_pdf)

        assert "Date\tDescription\tAmount" in layout
        assert "Total Amount Due: Rs. 12,345.67" in layout

    def test_regions(self, extractor, hdfc_pdf):
        """Test the first page is split into named bands."""
        regions = extractor.extract_regions(hdfc_pdf)

        assert set(regions) == {"header", "account", "transactions"}
        assert "Statement Date" in regions["header"]
        assert "Card Number" not in regions["header"]
        assert "Card Number" in regions["account"]
        assert "Grocery Store" in regions["transactions"]

    def test_text_lines(self, extractor, hdfc_pdf):
        """Test positioned lines carry text, position and font size."""
        lines = extractor.extract_text_lines(hdfc_pdf)
        name_line = next(line for line in lines if line.text == "Name: Rahul Mehta")

        assert name_line.x == pytest.approx(50, abs=1)
        assert name_line.font_size == pytest.approx(10, abs=0.5)
        assert [line.text for line in lines if line.y == name_line.y] == ["Name: Rahul Mehta"]

    def test_text_lines_increase_across_pages(self, extractor, pdf_builder):
        """Test the second page's lines sit below the first page's."""
        document = pdf_builder([[(50, 700, "Page one")], [(50, 40, "Page two")]])
        lines = extractor.extract_text_lines(document)

        assert [line.text for line in lines] == ["Page one", "Page two"]
        assert lines[1].y > lines[0].y

    def test_tables(self, extractor, hdfc_pdf):
        """Test transaction rows are rebuilt cell by cell."""
        rows = extractor.extract_tables(hdfc_pdf)

        assert ["Date", "Description", "Amount"] in rows
        assert ["05-Dec-2023", "Grocery Store", "Rs. 540.00"] in rows
        assert ["20-Dec-2023", "Payment Received", "Rs. 5,000.00 Cr"] in rows

    def test_views_match_individual_calls(self, extractor, hdfc_pdf):
        """Test extract_views returns the same four views."""
        views = extractor.extract_views(hdfc_pdf)

        assert views.text == extractor.extract_text(hdfc_pdf)
        assert views.layout_text == extractor.extract_layout_text(hdfc_pdf)
        assert views.regions == extractor.extract_regions(hdfc_pdf)
        assert list(views.lines) == extractor.extract_text_lines(hdfc_pdf)

    def test_corrupt_document_wrapped(self, extractor):
        """Test extraction failures surface as InvalidDocumentError."""
        with pytest.raises(InvalidDocumentError) as exc_info:
            extractor.extract_text(b"%PDF-1.4 garbage")
        assert exc_info.value.error_code == "PARSE_002"
        assert exc_info.value.__cause__ is not None


class TestGroupRows:
    """Test suite for group_rows."""

    def test_rows_and_cells_ordered(self, table_lines):
        """Test rows top to bottom and cells left to right."""
        assert group_rows(table_lines) == [
            ["Date", "Description", "Amount"],
            ["01-Feb-2024", "Grocery Store", "Rs. 540.00"],
        ]

    def test_tolerance(self, table_lines):
        """Test a tight tolerance splits a slightly uneven row."""
        rows = group_rows(table_lines, y_tolerance=0.1)
        assert ["01-Feb-2024"] in rows
        assert ["Grocery Store"] in rows

    def test_blank_cells_dropped(self):
        """Test whitespace-only cells and rows are skipped."""
        lines = [TextLine(text="  ", x=10, y=10), TextLine(text="A", x=10, y=30), TextLine(text=" ", x=50, y=30)]
        assert group_rows(lines) == [["A"]]

    def test_empty(self):
        """Test no lines yields no rows."""
        assert group_rows([]) == []
