"""Statement parsing service.

This module orchestrates the parsing workflow:
1. Validate the document (openable PDF with pages)
2. Extract linear text
3. Detect the issuer and select its strategy
4. Extract the remaining text views and run the strategy
"""

import logging
import time

from statement_parser.core.exceptions import IncompleteStatementError, UnsupportedIssuerError
from statement_parser.parsers.extractor import Document, PDFExtractor
from statement_parser.parsers.factory import StrategyRegistry, get_default_registry
from statement_parser.schemas.internal import StatementRecord

logger = logging.getLogger(__name__)


class StatementService:
    """Service for parsing credit card statements.

    The service is stateless; one instance can be shared across threads
    as long as the registry it holds is not replaced.
    """

    def __init__(
        self,
        registry: StrategyRegistry | None = None,
        extractor: PDFExtractor | None = None,
    ):
        """Initialize the service.

        Args:
            registry: Issuer strategies (default: the shared default registry)
            extractor: PDF extractor instance (default: new PDFExtractor)
        """
        self.registry = registry or get_default_registry()
        self.extractor = extractor or PDFExtractor()

    def detect_issuer(self, text: str | None) -> str:
        """Return the issuer name for statement text, or "Unknown"."""
        return self.registry.detect_issuer(text)

    def parse(self, document: Document, password: str | None = None) -> StatementRecord | None:
        """Parse a statement document.

        The record is returned even when it is incomplete; check
        ``record.is_valid()``.

        Args:
            document: PDF content as bytes, or a path
            password: Optional password for encrypted PDFs

        Returns:
            StatementRecord, or None if no issuer strategy matched

        Raises:
            InvalidDocumentError: If the document cannot be opened or has no pages
        """
        start_time = time.time()

        # Step 1: Structural validation
        self.extractor.validate(document, password=password)

        # Step 2-3: Linear text and issuer detection
        text = self.extractor.extract_text(document, password=password)
        strategy = self.registry.select(text)
        if strategy is None:
            logger.info("No issuer strategy matched; returning no result")
            return None

        # Step 4: All views (opened again, only once an issuer matched), then extraction
        views = self.extractor.extract_views(document, password=password)
        record = strategy.extract(views)

        processing_time_ms = int((time.time() - start_time) * 1000)
        logger.info(
            "Statement parsed: issuer=%s, valid=%s, transactions=%d, time=%dms",
            record.issuer_name,
            record.is_valid(),
            len(record.transactions),
            processing_time_ms,
        )
        return record

    def parse_strict(self, document: Document, password: str | None = None) -> StatementRecord:
        """Parse a statement and require a complete record.

        Raises:
            InvalidDocumentError: If the document cannot be opened or has no pages
            UnsupportedIssuerError: If no issuer strategy matched (PARSE_001)
            IncompleteStatementError: If card, total due or due date is missing (VAL_001)
        """
        record = self.parse(document, password=password)
        if record is None:
            raise UnsupportedIssuerError("PARSE_001")

        if not record.is_valid():
            missing = [
                name
                for name in ("card_last_four", "total_amount_due", "payment_due_date")
                if getattr(record, name) is None
            ]
            raise IncompleteStatementError(
                "VAL_001", {"issuer": record.issuer_name, "missing_fields": missing}
            )

        return record
