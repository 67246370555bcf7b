"""Last-resort fallback tiers.

These run only after every pattern and keyword for a field has failed.
They are guesses about typical statement layouts, not extraction rules:

- largest_amount: the total balance is usually the largest figure printed.
- first_date: the statement date is usually printed before the due date.

Strategies refer to them by name in their field tables (see HEURISTICS).
"""

import logging
from collections.abc import Callable
from datetime import date
from decimal import Decimal

from statement_parser.parsers.amounts import is_valid_amount
from statement_parser.parsers.dates import is_valid_date
from statement_parser.parsers.patterns import extract_all_amounts, extract_all_dates

logger = logging.getLogger(__name__)


def largest_amount(text: str | None) -> Decimal | None:
    """Return the largest valid currency amount in the text."""
    candidates = [amount for amount in extract_all_amounts(text) if is_valid_amount(amount)]
    if not candidates:
        return None
    result = max(candidates)
    logger.debug("Largest amount heuristic picked %s of %d candidates", result, len(candidates))
    return result


def first_date(text: str | None) -> date | None:
    """Return the first valid date in document order."""
    for value in extract_all_dates(text):
        if is_valid_date(value):
            logger.debug("First date heuristic picked %s", value)
            return value
    return None


HEURISTICS: dict[str, Callable[[str | None], object]] = {
    "largest_amount": largest_amount,
    "first_date": first_date,
}
