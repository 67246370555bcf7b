"""Tests for the statement parsing service."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from statement_parser.core.exceptions import (
    IncompleteStatementError,
    InvalidDocumentError,
    UnsupportedIssuerError,
)
from statement_parser.parsers.extractor import DocumentViews, PDFExtractor
from statement_parser.parsers.factory import build_default_registry, get_default_registry
from statement_parser.schemas.internal import StatementRecord
from statement_parser.services.statement import StatementService


@pytest.fixture
def mock_extractor():
    """Extractor mock that returns the minimal HDFC text."""
    extractor = MagicMock(spec=PDFExtractor)
    extractor.extract_text.return_value = "HDFC BANK\nCard Number: XXXX XXXX XXXX 4321"
    extractor.extract_views.return_value = DocumentViews(
        text=(
            "HDFC BANK\n"
            "Card Number: XXXX XXXX XXXX 4321\n"
            "Payment Due Date: 15-Jan-2024\n"
            "Total Amount Due: Rs. 12,345.67\n"
        )
    )
    return extractor


class TestStatementServiceInit:
    """Test suite for service construction."""

    def test_defaults(self):
        """Test the shared registry and a fresh extractor are used."""
        service = StatementService()
        assert service.registry is get_default_registry()
        assert isinstance(service.extractor, PDFExtractor)


class TestParse:
    """Test suite for StatementService.parse."""

    def test_pipeline_order(self, mock_extractor):
        """Test validate, detect, then extract views with the password."""
        service = StatementService(build_default_registry(), mock_extractor)
        record = service.parse(b"%PDF", password="pw")

        mock_extractor.validate.assert_called_once_with(b"%PDF", password="pw")
        mock_extractor.extract_text.assert_called_once_with(b"%PDF", password="pw")
        mock_extractor.extract_views.assert_called_once_with(b"%PDF", password="pw")
        assert record.issuer_name == "HDFC Bank"
        assert record.total_amount_due == Decimal("12345.67")
        assert record.is_valid()

    def test_unknown_issuer_returns_none(self, mock_extractor):
        """Test no strategy means no result and no view extraction."""
        mock_extractor.extract_text.return_value = "Quarterly Newsletter"
        service = StatementService(build_default_registry(), mock_extractor)

        assert service.parse(b"%PDF") is None
        mock_extractor.extract_views.assert_not_called()

    def test_invalid_document_propagates(self, mock_extractor):
        """Test structural errors are raised, not swallowed."""
        mock_extractor.validate.side_effect = InvalidDocumentError("PARSE_003")
        service = StatementService(build_default_registry(), mock_extractor)

        with pytest.raises(InvalidDocumentError) as exc_info:
            service.parse(b"%PDF")
        assert exc_info.value.error_code == "PARSE_003"
        mock_extractor.extract_text.assert_not_called()

    def test_incomplete_record_returned(self, mock_extractor):
        """Test a partial record is returned for the caller to check."""
        mock_extractor.extract_views.return_value = DocumentViews(text="HDFC BANK")
        service = StatementService(build_default_registry(), mock_extractor)

        record = service.parse(b"%PDF")
        assert record is not None
        assert not record.is_valid()

    def test_detect_issuer(self):
        """Test issuer detection on plain text."""
        service = StatementService()
        assert service.detect_issuer("American Express statement") == "American Express"
        assert service.detect_issuer("hello") == "Unknown"


class TestParseStrict:
    """Test suite for StatementService.parse_strict."""

    def test_complete_record(self, mock_extractor):
        """Test a complete record is returned unchanged."""
        service = StatementService(build_default_registry(), mock_extractor)
        record = service.parse_strict(b"%PDF")
        assert isinstance(record, StatementRecord)
        assert record.payment_due_date == date(2024, 1, 15)

    def test_unknown_issuer_raises(self, mock_extractor):
        """Test an unmatched document raises PARSE_001."""
        mock_extractor.extract_text.return_value = "Quarterly Newsletter"
        service = StatementService(build_default_registry(), mock_extractor)

        with pytest.raises(UnsupportedIssuerError) as exc_info:
            service.parse_strict(b"%PDF")
        assert exc_info.value.error_code == "PARSE_001"

    def test_incomplete_record_raises(self, mock_extractor):
        """Test missing required fields are listed in the error."""
        mock_extractor.extract_views.return_value = DocumentViews(
            text="HDFC BANK\nCard Number: XXXX XXXX XXXX 4321"
        )
        service = StatementService(build_default_registry(), mock_extractor)

        with pytest.raises(IncompleteStatementError) as exc_info:
            service.parse_strict(b"%PDF")
        assert exc_info.value.error_code == "VAL_001"
        assert exc_info.value.details["issuer"] == "HDFC Bank"
        assert exc_info.value.details["missing_fields"] == ["total_amount_due", "payment_due_date"]


class TestParseRealDocuments:
    """Test suite for parsing generated PDFs end to end through the service."""

    def test_hdfc_pdf(self, hdfc_pdf):
        """Test a generated HDFC statement is parsed completely."""
        record = StatementService().parse(hdfc_pdf)

        assert record.issuer_name == "HDFC Bank"
        assert record.card_last_four == "4321"
        assert record.is_valid()

    def test_unknown_pdf(self, unknown_pdf):
        """Test a readable PDF from no known issuer yields None."""
        assert StatementService().parse(unknown_pdf) is None

    def test_corrupt_pdf(self):
        """Test corrupt bytes raise PARSE_002."""
        with pytest.raises(InvalidDocumentError) as exc_info:
            StatementService().parse(b"garbage")
        assert exc_info.value.error_code == "PARSE_002"
