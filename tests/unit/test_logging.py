"""Tests for PII masking in logs."""

import logging

import pytest

from statement_parser.core.logging import PIIFilter, filter_pii, setup_logging


class TestFilterPII:
    """Test suite for filter_pii."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Card 4111 1111 1111 1111 parsed", "Card [CARD] parsed"),
            ("Card 4111-1111-1111-1111", "Card [CARD]"),
            ("Contact rahul.mehta@example.com", "Contact [EMAIL]"),
            ("PAN ABCDE1234F on file", "PAN [PAN] on file"),
            ("Call +91 98765 43210", "Call [PHONE]"),
        ],
    )
    def test_masks_pii(self, text, expected):
        """Test each PII kind is replaced by its placeholder."""
        assert filter_pii(text) == expected

    def test_masked_card_untouched(self):
        """Test already-masked numbers and amounts pass through."""
        text = "Card XXXX XXXX XXXX 4321 total Rs. 12,345.67"
        assert filter_pii(text) == text

    def test_empty(self):
        """Test empty input is returned as is."""
        assert filter_pii("") == ""


class TestPIIFilter:
    """Test suite for the logging filter."""

    def test_masks_formatted_message(self):
        """Test arguments are masked after formatting."""
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "Card %s", ("4111 1111 1111 1111",), None)

        assert PIIFilter().filter(record) is True
        assert record.getMessage() == "Card [CARD]"

    def test_clean_record_untouched(self):
        """Test records without PII keep their arguments."""
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "Parsed %d rows", (3,), None)

        PIIFilter().filter(record)
        assert record.args == (3,)


class TestSetupLogging:
    """Test suite for setup_logging."""

    def test_file_handler(self, tmp_path):
        """Test a log file is created and filtered."""
        log_file = tmp_path / "logs" / "parser.log"
        root = logging.getLogger()
        before = list(root.handlers)
        level = root.level
        try:
            setup_logging("DEBUG", str(log_file))
            logging.getLogger("test").info("Card 4111 1111 1111 1111")
            for handler in root.handlers:
                handler.flush()
        finally:
            for handler in root.handlers[:]:
                if handler not in before:
                    root.removeHandler(handler)
                    handler.close()
            root.setLevel(level)

        content = log_file.read_text()
        assert "[CARD]" in content
        assert "4111" not in content
