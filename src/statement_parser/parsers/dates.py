"""Date normalization for statement values.

Templates are tried in a fixed order and the first one that parses wins,
so an ambiguous string like ``01-02-2024`` always resolves the same way
(day first, 1 February 2024).
"""

import logging
import re
from datetime import date, datetime

from statement_parser.core.config import settings

logger = logging.getLogger(__name__)

# Priority order matters; do not sort.
DATE_FORMATS = [
    "%d-%m-%Y",  # 15-01-2024
    "%d/%m/%Y",  # 15/01/2024
    "%d %b %Y",  # 15 Jan 2024
    "%d-%b-%Y",  # 15-Jan-2024
    "%d %B %Y",  # 15 January 2024
    "%Y-%m-%d",  # 2024-01-15
    "%m/%d/%Y",  # 01/31/2024
    "%b %d, %Y",  # Jan 15, 2024
    "%B %d, %Y",  # January 15, 2024
    "%d-%b-%y",  # 15-Jan-24
    "%d/%b/%Y",  # 15/Jan/2024
    "%d.%m.%Y",  # 15.01.2024
    "%d/%m/%y",  # 15/01/24
    "%d-%m-%y",  # 15-01-24
    "%d %b, %Y",  # 15 Jan, 2024
]

# Date-shaped substrings, in the order they are looked for
DATE_SHAPES = [
    re.compile(r"\b\d{2}-\d{2}-\d{4}\b"),
    re.compile(r"\b\d{2}/\d{2}/\d{4}\b"),
    re.compile(r"\b\d{1,2}\s+[A-Za-z]{3,9},?\s+\d{4}\b"),
    re.compile(r"\b\d{2}-[A-Za-z]{3}-\d{4}\b"),
    re.compile(r"\b\d{2}-[A-Za-z]{3}-\d{2}\b"),
    re.compile(r"\b\d{4}-\d{2}-\d{2}\b"),
    re.compile(r"\b[A-Za-z]{3,9}\s+\d{1,2},\s+\d{4}\b"),
    re.compile(r"\b\d{2}/[A-Za-z]{3}/\d{4}\b"),
    re.compile(r"\b\d{2}\.\d{2}\.\d{4}\b"),
    re.compile(r"\b\d{2}/\d{2}/\d{2}\b"),
]


def parse_date(text: str | None) -> date | None:
    """Parse a date string using the known templates.

    Args:
        text: Raw date text (surrounding whitespace is ignored)

    Returns:
        Parsed date, or None if no template matches
    """
    if not text:
        return None

    normalized = re.sub(r"\s+", " ", text.strip())
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(normalized, fmt).date()
        except ValueError:
            continue

    logger.debug("Could not parse date: %r", text)
    return None


def parse_date_with_format(text: str | None, fmt: str) -> date | None:
    """Parse a date with one explicit strptime template."""
    if not text:
        return None
    try:
        return datetime.strptime(text.strip(), fmt).date()
    except ValueError:
        logger.debug("Date %r does not match format %s", text, fmt)
        return None


def extract_and_parse_date(text: str | None) -> date | None:
    """Find the first date-shaped substring in free text and parse it.

    Shapes are checked in priority order; within a shape the earliest
    occurrence is used. A substring that looks like a date but does not
    parse (e.g. ``31-02-2024``) lets the next shape run.
    """
    if not text:
        return None

    for shape in DATE_SHAPES:
        for match in shape.finditer(text):
            parsed = parse_date(match.group(0))
            if parsed is not None:
                return parsed

    return None


def _shift_years(value: date, years: int) -> date:
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        # 29 February in a non-leap target year
        return value.replace(year=value.year + years, day=28)


def is_valid_date(value: date | None, today: date | None = None) -> bool:
    """Check that a date falls inside the plausible statement window.

    The window is open on both ends: strictly after ``today`` minus
    DATE_MAX_AGE_YEARS and strictly before ``today`` plus
    DATE_MAX_FUTURE_YEARS.

    Args:
        value: Date to check
        today: Reference date (defaults to the current date)

    Returns:
        True if the date is plausible for a statement
    """
    if value is None:
        return False

    today = today or date.today()
    earliest = _shift_years(today, -settings.DATE_MAX_AGE_YEARS)
    latest = _shift_years(today, settings.DATE_MAX_FUTURE_YEARS)
    return earliest < value < latest
