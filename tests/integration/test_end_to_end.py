"""End-to-end parsing of generated statement PDFs."""

from datetime import date
from decimal import Decimal

import pytest

from statement_parser.parsers.extractor import PDFExtractor
from statement_parser.parsers.factory import build_default_registry
from statement_parser.schemas.internal import TransactionType
from statement_parser.services.statement import StatementService


@pytest.fixture
def service() -> StatementService:
    return StatementService(build_default_registry(), PDFExtractor())


class TestHDFCStatement:
    """Test suite for a complete HDFC statement."""

    def test_all_fields(self, service, hdfc_pdf):
        """Test every summary field is extracted."""
        record = service.parse(hdfc_pdf)

        assert record.issuer_name == "HDFC Bank"
        assert record.card_last_four == "4321"
        assert record.card_variant == "Regalia"
        assert record.cardholder_name == "Rahul Mehta"
        assert record.statement_date == date(2024, 1, 1)
        assert record.payment_due_date == date(2024, 1, 15)
        assert record.total_amount_due == Decimal("12345.67")
        assert record.minimum_amount_due == Decimal("617.28")
        assert record.credit_limit == Decimal("200000.00")
        assert record.available_credit == Decimal("187654.33")
        assert record.is_valid()

    def test_transactions(self, service, hdfc_pdf):
        """Test table rows in document order with the credit marked."""
        transactions = service.parse(hdfc_pdf).transactions

        assert [(t.transaction_date, t.description, t.amount, t.type) for t in transactions] == [
            (date(2023, 12, 5), "Grocery Store", Decimal("540.00"), TransactionType.DEBIT),
            (date(2023, 12, 12), "Amazon India", Decimal("1299.00"), TransactionType.DEBIT),
            (date(2023, 12, 20), "Payment Received", Decimal("5000.00"), TransactionType.CREDIT),
        ]

    def test_idempotent(self, service, hdfc_pdf):
        """Test parsing the same bytes twice gives equal records."""
        assert service.parse(hdfc_pdf) == service.parse(hdfc_pdf)

    def test_summary(self, service, hdfc_pdf):
        """Test the five key data points."""
        summary = service.parse(hdfc_pdf).to_summary()
        assert summary == {
            "card_last_four": "4321",
            "card_variant": "Regalia",
            "statement_date": date(2024, 1, 1),
            "payment_due_date": date(2024, 1, 15),
            "total_amount_due": Decimal("12345.67"),
        }

    def test_encrypted_statement(self, service, encrypted_hdfc_pdf):
        """Test an encrypted statement parses with its password."""
        record = service.parse(encrypted_hdfc_pdf, password="secret")

        assert record.card_last_four == "4321"
        assert record.is_valid()


class TestOtherDocuments:
    """Test suite for documents that are not supported statements."""

    def test_unknown_issuer(self, service, unknown_pdf):
        """Test a readable non-statement yields None."""
        assert service.parse(unknown_pdf) is None

    def test_large_font_statement(self, service, pdf_builder):
        """Test detection and extraction do not depend on font size."""
        document = pdf_builder(
            [
                [
                    (50, 40, "HDFC BANK"),
                    (50, 80, "Card Number: XXXX XXXX XXXX 8765"),
                    (50, 120, "Payment Due Date: 15-Jan-2024"),
                    (50, 160, "Total Amount Due: Rs. 999.00"),
                ]
            ],
            font_size=14,
        )
        record = service.parse(document)

        assert record.card_last_four == "8765"
        assert record.total_amount_due == Decimal("999.00")
