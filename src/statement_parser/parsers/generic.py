"""Generic credit card statement parser.

This module provides the GenericParser class, the extraction engine
shared by every issuer. Issuer refinements inherit from it and declare
only their vocabulary: detection rule, card patterns and one FieldSpec
per field. The engine runs every field through the same fallback chain:

1. strict regexes on the linear text
2. the same (or looser layout) regexes on the layout text
3. keyword labels on the linear text, the layout text, then a page region
4. a named heuristic from parsers.heuristics, if the field has one

Each candidate is normalized and validated as soon as it is found.
A candidate that fails is dropped and the chain continues; a field whose
chain runs dry is left as None.
"""

import logging
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from statement_parser.core.config import settings
from statement_parser.parsers.amounts import (
    extract_amount,
    is_valid_amount,
    is_valid_amount_or_zero,
    parse_regional_amount,
)
from statement_parser.parsers.dates import extract_and_parse_date, is_valid_date, parse_date
from statement_parser.parsers.detector import DetectionRule
from statement_parser.parsers.extractor import DocumentViews, group_rows
from statement_parser.parsers.heuristics import HEURISTICS
from statement_parser.parsers.patterns import extract_first, find_value_after_keyword
from statement_parser.schemas.internal import (
    StatementRecord,
    TransactionRecord,
    TransactionType,
)

logger = logging.getLogger(__name__)

# Reused fragments for field patterns
DATE_TOKEN = r"(\d{1,2}[-/ ](?:[A-Za-z]{3,9}|\d{2})[-/ ]\d{2,4})"
AMOUNT_TOKEN = r"(?:Rs\.?|₹|INR)?\s*([\d,]+(?:\.\d{1,2})?)"
# "Credit Limit" but not "Available Credit Limit"
CREDIT_LIMIT_LABEL = r"(?<!Available\s)(?:Total\s+)?Credit\s+Limit"

MASKED_CARD = re.compile(r"(?:[0-9Xx*•]{4}[\s-]?){3}([0-9]{4})(?!\d)")
TRAILING_DIGITS = re.compile(r"(?<!\d)(\d{4})\s*$")
CREDIT_MARKER = re.compile(r"(?<![A-Za-z])Cr\.?\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class FieldSpec:
    """Declarative lookup rules for one statement field.

    Attributes:
        patterns: Strict regexes for the linear text (group 1 is the value)
        layout_patterns: Looser regexes for the layout text; when empty,
            ``patterns`` are reused
        keywords: Synonymous labels, in priority order
        region: Page region searched with the keywords as a last resort
        heuristic: Name of a fallback tier in parsers.heuristics
        not_after: Words that must not directly precede a keyword label
    """

    patterns: tuple[str, ...] = ()
    layout_patterns: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    region: str | None = None
    heuristic: str | None = None
    not_after: tuple[str, ...] = ()


def last_four_digits(raw: str | None) -> str | None:
    """Reduce a captured card number to its last four digits.

    Accepts a bare 4-digit capture, a 5-digit Amex ending, or a masked
    number such as ``XXXX XXXX XXXX 4321``.
    """
    if not raw:
        return None

    value = raw.strip()
    if re.fullmatch(r"\d{4}", value):
        return value
    if re.fullmatch(r"\d{5}", value):
        return value[-4:]

    match = MASKED_CARD.search(value) or TRAILING_DIGITS.search(value)
    if match:
        return match.group(1)
    return None


class GenericParser:
    """Field-extraction engine for credit card statements.

    Subclasses set the class attributes below; most never override a
    method. Hooks that can be overridden for issuer quirks:
        - _parse_date(): different date formats
        - _parse_amount(): different currency formats
        - _clean_variant(): product name cleanup

    Example:
        >>> parser = HDFCParser()
        >>> if parser.detect(views.text):
        ...     record = parser.extract(views)
        ...     print(record.card_last_four, record.is_valid())
    """

    name: str = "Generic"
    detection: DetectionRule = DetectionRule()

    CARD = FieldSpec(
        patterns=(
            r"Card\s+(?:Number|No\.?)\s*:?\s*((?:[X*]{4}\s*){3}\d{4})",
            r"(?:ending|ends)\s+(?:in|with)\s*:?\s*(\d{4})",
        ),
        keywords=("Card Number", "Card No"),
        region="account",
    )
    VARIANT = FieldSpec(keywords=("Card Type", "Card Variant", "Product"), region="header")
    STATEMENT_DATE = FieldSpec(
        patterns=(rf"Statement\s+Date\s*:?\s*{DATE_TOKEN}",),
        keywords=("Statement Date",),
        region="header",
        heuristic="first_date",
    )
    DUE_DATE = FieldSpec(
        patterns=(rf"(?:Payment\s+)?Due\s+Date\s*:?\s*{DATE_TOKEN}",),
        keywords=("Payment Due Date", "Due Date"),
        region="account",
    )
    TOTAL_DUE = FieldSpec(
        patterns=(rf"Total\s+Amount\s+Due\s*:?\s*{AMOUNT_TOKEN}",),
        keywords=("Total Amount Due", "Amount Due", "Outstanding Balance"),
        region="account",
        heuristic="largest_amount",
    )
    MINIMUM_DUE = FieldSpec(
        patterns=(rf"Minimum\s+(?:Amount\s+|Payment\s+)?Due\s*:?\s*{AMOUNT_TOKEN}",),
        keywords=("Minimum Amount Due", "Minimum Due", "Minimum Payment Due"),
        region="account",
    )
    CREDIT_LIMIT = FieldSpec(
        patterns=(rf"{CREDIT_LIMIT_LABEL}\s*:?\s*{AMOUNT_TOKEN}",),
        keywords=("Credit Limit", "Total Limit", "Card Limit"),
        region="account",
        not_after=("Available",),
    )
    AVAILABLE_CREDIT = FieldSpec(
        patterns=(rf"Available\s+(?:Credit\s+)?(?:Limit|Credit)\s*:?\s*{AMOUNT_TOKEN}",),
        keywords=("Available Credit", "Available Limit", "Credit Available"),
        region="account",
    )
    CARDHOLDER = FieldSpec(
        patterns=(r"^\s*Name\s*:\s*([A-Za-z][A-Za-z .']{1,58})$",),
        keywords=("Cardholder Name", "Card Holder Name", "Customer Name"),
        region="header",
    )

    KNOWN_VARIANTS: tuple[str, ...] = ()
    VARIANT_NOISE = r"\b(?:credit|card)\b"

    # "regex": date/description/amount triples over linear text
    # "table": rows rebuilt from positioned lines, regex as fallback
    TRANSACTION_MODE = "regex"
    TRANSACTION_PATTERN = (
        r"(\d{2}[-/](?:[A-Za-z]{3}|\d{2})[-/]\d{2,4})[ \t]+(.{10,60}?)[ \t]+"
        r"(?:Rs\.?|₹)?[ \t]*([\d,]+\.\d{2})(?:[ \t]*(Cr|Dr)\b)?"
    )
    # Trailing markers that make a text row a credit; anything else is a debit
    CREDIT_MARKERS: tuple[str, ...] = ("cr",)

    def detect(self, text: str | None) -> bool:
        """Check whether the statement text belongs to this issuer."""
        return self.detection.matches(text)

    def extract(self, views: DocumentViews) -> StatementRecord:
        """Extract every field from the document views.

        Fields are independent: a field that cannot be found is None and
        extraction of the remaining fields continues.

        Args:
            views: Text views produced by PDFExtractor

        Returns:
            StatementRecord (check is_valid() for completeness)
        """
        record = StatementRecord(
            issuer_name=self.name,
            card_last_four=self._find_card_number(views),
            card_variant=self._find_card_variant(views),
            cardholder_name=self._find_cardholder_name(views),
            statement_date=self._find_date(views, self.STATEMENT_DATE, "statement_date"),
            payment_due_date=self._find_date(views, self.DUE_DATE, "payment_due_date"),
            total_amount_due=self._find_amount(views, self.TOTAL_DUE, "total_amount_due"),
            minimum_amount_due=self._find_amount(views, self.MINIMUM_DUE, "minimum_amount_due"),
            credit_limit=self._find_amount(views, self.CREDIT_LIMIT, "credit_limit"),
            available_credit=self._find_amount(
                views, self.AVAILABLE_CREDIT, "available_credit", allow_zero=True
            ),
            transactions=tuple(self._extract_transactions(views)),
        )

        logger.info(
            "Parsed %s statement: valid=%s, transactions=%d",
            self.name,
            record.is_valid(),
            len(record.transactions),
        )
        return record

    # ------------------------------------------------------------------
    # Fallback chain
    # ------------------------------------------------------------------

    def _candidates(self, views: DocumentViews, spec: FieldSpec) -> Iterator[tuple[str, str]]:
        """Yield (tier, raw value) pairs in fallback order, lazily."""
        for pattern in spec.patterns:
            raw = extract_first(views.text, pattern)
            if raw:
                yield "text pattern", raw

        for pattern in spec.layout_patterns or spec.patterns:
            raw = extract_first(views.layout_text, pattern)
            if raw:
                yield "layout pattern", raw

        if not spec.keywords:
            return

        sources = [("text keyword", views.text), ("layout keyword", views.layout_text)]
        if spec.region:
            sources.append((f"{spec.region} region keyword", views.regions.get(spec.region)))

        for tier, source in sources:
            raw = find_value_after_keyword(source, *spec.keywords, not_after=spec.not_after)
            if raw:
                yield tier, raw

    def _resolve(
        self,
        views: DocumentViews,
        spec: FieldSpec,
        field_name: str,
        normalize: Callable[[str], Any],
        is_valid: Callable[[Any], bool],
    ) -> Any:
        for tier, raw in self._candidates(views, spec):
            value = normalize(raw)
            if value is not None and is_valid(value):
                logger.debug("%s: %s found via %s", self.name, field_name, tier)
                return value
            logger.debug("%s: %s candidate from %s rejected", self.name, field_name, tier)

        if spec.heuristic:
            value = HEURISTICS[spec.heuristic](views.text)
            if value is not None and is_valid(value):
                logger.debug("%s: %s found via %s heuristic", self.name, field_name, spec.heuristic)
                return value

        logger.debug("%s: %s not found", self.name, field_name)
        return None

    # ------------------------------------------------------------------
    # Field finders
    # ------------------------------------------------------------------

    def _find_card_number(self, views: DocumentViews) -> str | None:
        return self._resolve(views, self.CARD, "card_last_four", last_four_digits, lambda v: True)

    def _find_card_variant(self, views: DocumentViews) -> str | None:
        """Find the card product name.

        After the field chain, the text is scanned for any known variant
        name (longest names first, so "Regalia First" beats "Regalia").
        """
        variant = self._resolve(views, self.VARIANT, "card_variant", self._clean_variant, bool)
        if variant:
            return variant

        for known in sorted(self.KNOWN_VARIANTS, key=len, reverse=True):
            if re.search(rf"\b{re.escape(known)}(?!\w)", views.text, re.IGNORECASE):
                logger.debug("%s: card_variant found via known variant scan", self.name)
                return known
        return None

    def _find_cardholder_name(self, views: DocumentViews) -> str | None:
        def clean(raw: str) -> str | None:
            name = re.sub(r"\s+", " ", raw.split("\t")[0]).strip()
            if not name or re.search(r"\d", name) or len(name) > 60:
                return None
            return name

        return self._resolve(views, self.CARDHOLDER, "cardholder_name", clean, bool)

    def _find_date(self, views: DocumentViews, spec: FieldSpec, field_name: str) -> date | None:
        return self._resolve(views, spec, field_name, self._normalize_date, is_valid_date)

    def _find_amount(
        self,
        views: DocumentViews,
        spec: FieldSpec,
        field_name: str,
        allow_zero: bool = False,
    ) -> Decimal | None:
        validator = is_valid_amount_or_zero if allow_zero else is_valid_amount
        return self._resolve(views, spec, field_name, self._parse_amount, validator)

    # ------------------------------------------------------------------
    # Normalization hooks
    # ------------------------------------------------------------------

    def _parse_date(self, text: str) -> date | None:
        """Parse a string that is exactly one date (a capture or a table cell).

        Override this method in subclasses for issuer-specific date formats.
        """
        return parse_date(text)

    def _normalize_date(self, text: str) -> date | None:
        """Parse a field value, or the first date inside a longer value."""
        return self._parse_date(text) or extract_and_parse_date(text)

    def _parse_amount(self, text: str) -> Decimal | None:
        """Parse a captured amount, or the first amount inside a longer value.

        Override this method in subclasses for issuer-specific currency formats.
        """
        value = parse_regional_amount(text)
        if value is not None:
            return value
        return extract_amount(text)

    def _clean_variant(self, raw: str) -> str | None:
        """Normalize a captured product name.

        A known variant inside the capture wins; otherwise generic words
        (card, credit, issuer name) are removed from the first column.
        """
        value = raw.split("\t")[0]
        for known in sorted(self.KNOWN_VARIANTS, key=len, reverse=True):
            if re.search(rf"\b{re.escape(known)}(?!\w)", value, re.IGNORECASE):
                return known

        value = re.sub(self.VARIANT_NOISE, " ", value, flags=re.IGNORECASE)
        value = re.sub(r"\s+", " ", value).strip(" :-")
        if not value or len(value) > 40:
            return None
        return value

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def _extract_transactions(self, views: DocumentViews) -> list[TransactionRecord]:
        """Extract transactions in document order, capped at MAX_TRANSACTIONS."""
        if self.TRANSACTION_MODE == "table":
            transactions = self._transactions_from_table(views)
            if transactions:
                return transactions
            logger.debug("%s: no transaction rows found in table, trying text", self.name)

        return self._transactions_from_text(views.text)

    def _transactions_from_text(self, text: str) -> list[TransactionRecord]:
        transactions: list[TransactionRecord] = []
        if not text:
            return transactions

        for match in re.finditer(self.TRANSACTION_PATTERN, text, re.IGNORECASE):
            if len(transactions) >= settings.MAX_TRANSACTIONS:
                logger.warning("%s: transaction cap of %d reached", self.name, settings.MAX_TRANSACTIONS)
                break

            transaction_date = self._parse_date(match.group(1))
            amount = self._parse_amount(match.group(3))
            if not is_valid_date(transaction_date):
                logger.debug("%s: skipped transaction row dated %s", self.name, transaction_date)
                continue
            if not is_valid_amount(amount):
                continue

            marker = (match.group(4) or "") if match.re.groups >= 4 else ""
            is_credit = marker.lower() in self.CREDIT_MARKERS
            transactions.append(
                TransactionRecord(
                    transaction_date=transaction_date,
                    description=re.sub(r"\s+", " ", match.group(2)),
                    amount=amount,
                    type=TransactionType.CREDIT if is_credit else TransactionType.DEBIT,
                )
            )

        return transactions

    def _transactions_from_table(self, views: DocumentViews) -> list[TransactionRecord]:
        """Rebuild transaction rows from positioned lines.

        A row qualifies when its first cell is a date and a later cell is
        a positive amount. A date directly after the first is the posting
        date; the remaining cells form the description.
        Dates go through the _parse_date hook and must fall inside the
        statement date window; rows dated outside it are skipped.
        """
        transactions: list[TransactionRecord] = []

        for row in group_rows(views.lines):
            if len(transactions) >= settings.MAX_TRANSACTIONS:
                logger.warning("%s: transaction cap of %d reached", self.name, settings.MAX_TRANSACTIONS)
                break
            if len(row) < 2:
                continue

            transaction_date = self._parse_date(row[0])
            if not is_valid_date(transaction_date):
                if transaction_date is not None:
                    logger.debug("%s: skipped table row dated %s", self.name, transaction_date)
                continue

            rest = row[1:]
            posting_date = self._parse_date(rest[0]) if len(rest) > 1 else None
            if posting_date is not None:
                rest = rest[1:]
                if not is_valid_date(posting_date):
                    posting_date = None

            amount_index = None
            amount = None
            for index in range(len(rest) - 1, -1, -1):
                candidate = parse_regional_amount(rest[index])
                if is_valid_amount(candidate):
                    amount_index, amount = index, candidate
                    break
            if amount_index is None:
                continue

            description = " ".join(cell for i, cell in enumerate(rest) if i != amount_index)
            is_credit = CREDIT_MARKER.search(rest[amount_index]) is not None
            transactions.append(
                TransactionRecord(
                    transaction_date=transaction_date,
                    posting_date=posting_date,
                    description=description,
                    amount=amount,
                    type=TransactionType.CREDIT if is_credit else TransactionType.DEBIT,
                )
            )

        return transactions
