"""Custom exception classes for statement parsing.

Only structural document failures are raised by the parser core.
Missing fields and unmatched issuers are reported as absent values;
UnsupportedIssuerError and IncompleteStatementError exist for callers that
opt into strict parsing. Each exception maps to an error code in errors.py.
"""

from typing import Any

from statement_parser.core.errors import get_error


class StatementProcessingError(Exception):
    """Base exception for all statement parsing errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "PARSE_002")
        details: Additional context about the error (for logging)
    """

    def __init__(self, error_code: str, details: dict[str, Any] | None = None):
        """Initialize the exception.

        Args:
            error_code: Error code from errors.py
            details: Additional error context (not shown to users)
        """
        self.error_code = error_code
        self.details = details or {}
        super().__init__(error_code)

    @property
    def user_message(self) -> str:
        """User-facing explanation from the error catalog."""
        return get_error(self.error_code)["user_message"]

    def __str__(self) -> str:
        message = get_error(self.error_code)["message"]
        if self.details:
            return f"{self.error_code}: {message} ({self.details})"
        return f"{self.error_code}: {message}"


class InvalidDocumentError(StatementProcessingError):
    """Raised when a document cannot be opened or read as a PDF.

    Common causes:
    - Corrupted or non-PDF file (PARSE_002)
    - Password-protected PDF (PARSE_003)
    - Incorrect password (PARSE_004)
    - PDF without pages (PARSE_006)
    """

    pass


class UnsupportedIssuerError(StatementProcessingError):
    """Raised by strict callers when no issuer strategy matches (PARSE_001)."""

    pass


class IncompleteStatementError(StatementProcessingError):
    """Raised by strict callers when a record fails is_valid() (VAL_001)."""

    pass
