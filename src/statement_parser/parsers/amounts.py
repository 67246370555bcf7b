"""Amount normalization for statement values.

Statements mix Western (1,234,567.89) and Indian (12,34,567.89) digit
grouping, decorate amounts with currency markers and append Cr/Dr
suffixes. Every function here returns None for input it cannot read;
none of them raise on malformed text.
"""

import logging
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from statement_parser.core.config import settings

logger = logging.getLogger(__name__)

# Markers must be stripped before separators: "Rs.1,234.50" keeps its decimal point.
CURRENCY_MARKERS = re.compile(r"(?:₹|\bRs\.?|\bINR|\$|€|£)", re.IGNORECASE)
CREDIT_DEBIT_SUFFIX = re.compile(r"(?<![A-Za-z])(?:cr|dr)\.?\s*$", re.IGNORECASE)
RUPEE_SUFFIX = re.compile(r"/-\s*$")

INDIAN_GROUPING = re.compile(r"^\d{1,2}(?:,\d{2})*,\d{3}(?:\.\d{1,2})?$")
UNGROUPED = re.compile(r"^\d+(?:\.\d{1,2})?$")

# First amount-shaped token inside a longer value
AMOUNT_TOKEN = re.compile(
    r"(?:(?:₹|\bRs\.?|\bINR)\s*)?(\d[\d,]*(?:\.\d{1,2})?)(?:\s*(?:Cr|Dr)\b)?",
    re.IGNORECASE,
)
CURRENCY_AMOUNT_TOKEN = re.compile(r"(?:₹|\bRs\.?|\bINR)\s*(\d[\d,]*(?:\.\d{1,2})?)", re.IGNORECASE)


def _strip_markers(text: str) -> str:
    cleaned = CURRENCY_MARKERS.sub(" ", text)
    cleaned = CREDIT_DEBIT_SUFFIX.sub("", cleaned.strip())
    cleaned = RUPEE_SUFFIX.sub("", cleaned)
    return cleaned.strip()


def parse_amount(text: str | None) -> Decimal | None:
    """Parse a free-form amount string into a Decimal.

    Handles:
        - ₹1,23,456.78 (Indian grouping)
        - Rs. 12,345.67 / INR 500
        - $1,234.56 (Western grouping)
        - 2,500.00 Cr (credit/debit suffix)

    Args:
        text: Raw amount text

    Returns:
        Parsed amount, or None if the residue is not numeric
    """
    if not text:
        return None

    cleaned = _strip_markers(text)
    cleaned = cleaned.replace(",", "")
    cleaned = re.sub(r"\s+", "", cleaned)
    if not cleaned:
        return None

    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        logger.debug("Could not parse amount: %r", text)
        return None

    if not value.is_finite():
        return None
    return value


def parse_indian_amount(text: str | None) -> Decimal | None:
    """Parse an amount that uses Indian digit grouping.

    Only ``d,dd,dd,ddd.dd`` style grouping (or plain digits) is accepted,
    optionally followed by the ``/-`` rupee suffix. Western grouping such as
    ``123,456.00`` is rejected.
    """
    if not text:
        return None

    cleaned = re.sub(r"\s+", "", _strip_markers(text))
    if not (INDIAN_GROUPING.match(cleaned) or UNGROUPED.match(cleaned)):
        return None

    return Decimal(cleaned.replace(",", ""))


def parse_regional_amount(text: str | None) -> Decimal | None:
    """Try the Indian grouping first, then the general parser."""
    value = parse_indian_amount(text)
    if value is not None:
        return value
    return parse_amount(text)


def is_valid_amount(amount: Decimal | None) -> bool:
    """Check that an amount is strictly positive and below the sanity ceiling."""
    if amount is None:
        return False
    return Decimal(0) < amount < settings.MAX_AMOUNT


def is_valid_amount_or_zero(amount: Decimal | None) -> bool:
    """Like is_valid_amount, but zero is allowed (e.g. exhausted credit)."""
    if amount is None:
        return False
    return Decimal(0) <= amount < settings.MAX_AMOUNT


def extract_amount(text: str | None) -> Decimal | None:
    """Pull the first amount-shaped token out of a longer string.

    A currency-prefixed token wins over a bare number, so a value line
    like ``"(as of 15-Jan) Rs. 4,500.00"`` yields 4500.00.
    """
    if not text:
        return None

    match = CURRENCY_AMOUNT_TOKEN.search(text) or AMOUNT_TOKEN.search(text)
    if not match:
        return None
    return parse_amount(match.group(1))


def format_indian_currency(amount: Decimal | None) -> str:
    """Render an amount with the rupee glyph and Indian digit grouping.

    Example:
        >>> format_indian_currency(Decimal("123456.78"))
        '₹1,23,456.78'
    """
    if amount is None:
        return "₹0.00"

    quantized = amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    whole, fraction = f"{abs(quantized):.2f}".split(".")

    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])

    return f"{sign}₹{whole}.{fraction}"
