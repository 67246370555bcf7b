"""Regex and keyword extraction primitives shared by every issuer strategy.

All searches are case-insensitive and multiline. A bad pattern or a
missing capture group is logged and reported as None (or an empty list);
nothing in this module raises for malformed input.
"""

import logging
import re
from datetime import date
from decimal import Decimal

from statement_parser.parsers.amounts import parse_amount
from statement_parser.parsers.dates import parse_date

logger = logging.getLogger(__name__)

FLAGS = re.IGNORECASE | re.MULTILINE

# Rest of the line after a label and an optional colon
VALUE_AFTER_LABEL = r"\s*:?\s*([^\n]+)"

CURRENCY_AMOUNT = re.compile(r"(?:\bRs\.?|₹|\bINR)\s*([\d,]+\.?\d*)", re.IGNORECASE)
DATE_TOKEN = re.compile(
    r"\d{2}[-/]\d{2}[-/]\d{4}"
    r"|\d{2}[-/][A-Za-z]{3}[-/]\d{4}"
    r"|\d{2}\s+[A-Za-z]{3}\s+\d{4}"
)


def extract_first(text: str | None, pattern: str, group: int = 1) -> str | None:
    """Return the trimmed capture group of the first match, or None.

    Args:
        text: Text to search
        pattern: Regex pattern
        group: Capture group number (0 for the whole match)

    Returns:
        Trimmed match text, or None if nothing (non-empty) matched
    """
    if not text:
        return None

    try:
        match = re.search(pattern, text, FLAGS)
        if not match:
            return None
        value = match.group(group)
    except (re.error, IndexError) as e:
        logger.error("Error extracting pattern %r: %s", pattern, e)
        return None

    if value is None or not value.strip():
        return None

    logger.debug("Pattern matched: %s", pattern)
    return value.strip()


def extract_all(text: str | None, pattern: str, group: int = 1) -> list[str]:
    """Return every trimmed capture of ``pattern`` in document order."""
    if not text:
        return []

    results: list[str] = []
    try:
        for match in re.finditer(pattern, text, FLAGS):
            value = match.group(group)
            if value is not None:
                results.append(value.strip())
    except (re.error, IndexError) as e:
        logger.error("Error extracting all matches of %r: %s", pattern, e)
        return []

    logger.debug("Pattern matched %d times: %s", len(results), pattern)
    return results


def matches(text: str | None, pattern: str) -> bool:
    """Check whether ``pattern`` occurs anywhere in ``text``."""
    if not text:
        return False
    try:
        return re.search(pattern, text, FLAGS) is not None
    except re.error as e:
        logger.error("Error checking pattern %r: %s", pattern, e)
        return False


def extract_between(text: str | None, start_marker: str, end_marker: str) -> str | None:
    """Return the text between two literal markers (shortest span)."""
    pattern = re.escape(start_marker) + r"(.*?)" + re.escape(end_marker)
    return extract_first(text, pattern)


def clean_text(text: str | None) -> str | None:
    """Collapse runs of whitespace to single spaces."""
    if text is None:
        return None
    return re.sub(r"\s+", " ", text).strip()


def _fuzzy_label(keyword: str) -> str:
    return r"\s*".join(re.escape(part) for part in keyword.split())


def _not_after(words: tuple[str, ...]) -> str:
    return "".join(rf"(?<!{re.escape(word)}\s)" for word in words)


def find_value_after_keyword(
    text: str | None,
    *keywords: str,
    not_after: tuple[str, ...] = (),
) -> str | None:
    """Find the value that follows one of several synonymous labels.

    Every keyword is first tried as an exact phrase. Only when none of
    them matches is the list tried again with flexible whitespace inside
    the label, which tolerates wrapped or oddly spaced labels such as
    ``"Payment  Due\\nDate"``.

    Example:
        >>> find_value_after_keyword(text, "Total Amount Due", "Amount Due")
        'Rs. 12,345.67'

    Args:
        text: Text to search
        *keywords: Labels in priority order
        not_after: Words that must not directly precede the label, so that
            "Credit Limit" does not match inside "Available Credit Limit"

    Returns:
        Rest of the line after the first matching label, or None
    """
    if not text:
        return None

    guard = _not_after(not_after)

    for keyword in keywords:
        value = extract_first(text, guard + re.escape(keyword) + VALUE_AFTER_LABEL)
        if value is not None:
            logger.debug("Keyword matched: %s", keyword)
            return value

    for keyword in keywords:
        value = extract_first(text, guard + _fuzzy_label(keyword) + VALUE_AFTER_LABEL)
        if value is not None:
            logger.debug("Keyword matched with flexible spacing: %s", keyword)
            return value

    return None


def extract_all_amounts(text: str | None) -> list[Decimal]:
    """Return every currency-prefixed amount in document order."""
    if not text:
        return []

    amounts: list[Decimal] = []
    for match in CURRENCY_AMOUNT.finditer(text):
        value = parse_amount(match.group(1))
        if value is not None:
            amounts.append(value)
    return amounts


def extract_all_dates(text: str | None) -> list[date]:
    """Return every parseable date-shaped substring in document order."""
    if not text:
        return []

    dates: list[date] = []
    for match in DATE_TOKEN.finditer(text):
        value = parse_date(match.group(0))
        if value is not None:
            dates.append(value)
    return dates
