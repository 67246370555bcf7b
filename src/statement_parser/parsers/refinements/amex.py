"""American Express parser refinement.

Amex statements identify the card by a 5-digit account ending
("Account Ending 73008" or "XXXX-XXXXXX-73008"); the last four of those
digits are kept. Dates may use month names ("October 9, 2025").
"""

from statement_parser.parsers.detector import DetectionRule
from statement_parser.parsers.generic import (
    AMOUNT_TOKEN,
    CREDIT_LIMIT_LABEL,
    FieldSpec,
    GenericParser,
)

AMEX_DATE = r"(\d{2}[-/][A-Za-z]{3}[-/]\d{4}|[A-Za-z]{3,9}\s+\d{1,2},\s+\d{4}|\d{2}/\d{2}/\d{4})"


class AmexParser(GenericParser):
    """Parser refinement for American Express credit card statements.

    Amex-specific behaviors:
    - Card number: account ending (4 or 5 digits), masked XXXX-XXXXXX-X1234
    - "Closing Date" as the statement date, "New Balance" as the total due
    - "Membership" as the product label
    """

    name = "American Express"
    detection = DetectionRule(
        brands=(r"AMERICAN\s*EXPRESS", r"\bAMEX\b", r"americanexpress\.com"),
    )

    CARD = FieldSpec(
        patterns=(
            r"(?:Card|Account)\s+ending\s+(?:in\s*)?:?\s*(\d{4,5})\b",
            r"X{4}-X{6}-X?(\d{4,5})\b",
        ),
        keywords=("Account Ending", "Card ending in"),
        region="account",
    )
    VARIANT = FieldSpec(
        patterns=(r"(?:Card\s+Product|Membership)\s*:?\s*([A-Za-z ]+?)\s*$",),
        keywords=("Card Product", "Membership"),
        region="header",
    )
    STATEMENT_DATE = FieldSpec(
        patterns=(rf"(?:Statement\s+Date|Closing\s+Date)\s*:?\s*{AMEX_DATE}",),
        keywords=("Statement Date", "Closing Date", "Statement Period"),
        region="header",
        heuristic="first_date",
    )
    DUE_DATE = FieldSpec(
        patterns=(rf"(?:Payment\s+Due\s+Date|Due\s+Date)\s*:?\s*{AMEX_DATE}",),
        keywords=("Payment Due Date", "Due Date", "Please pay by"),
        region="account",
    )
    TOTAL_DUE = FieldSpec(
        patterns=(rf"(?:Total\s+Amount\s+Due|New\s+Balance|Amount\s+Due)\s*:?\s*{AMOUNT_TOKEN}",),
        keywords=("Total Amount Due", "New Balance", "Closing Balance", "Amount Due"),
        region="account",
        heuristic="largest_amount",
    )
    MINIMUM_DUE = FieldSpec(
        patterns=(rf"Minimum\s+(?:Payment|Amount)\s+Due\s*:?\s*{AMOUNT_TOKEN}",),
        keywords=("Minimum Payment Due", "Minimum Amount Due"),
        region="account",
    )
    CREDIT_LIMIT = FieldSpec(
        patterns=(rf"{CREDIT_LIMIT_LABEL}\s*:?\s*{AMOUNT_TOKEN}",),
        keywords=("Credit Limit",),
        region="account",
        not_after=("Available",),
    )

    KNOWN_VARIANTS = (
        "Platinum Travel",
        "Platinum Reserve",
        "Platinum",
        "Gold Charge",
        "Membership Rewards",
        "SmartEarn",
    )
    VARIANT_NOISE = r"\b(?:credit|card|american|express|amex)\b"

    TRANSACTION_PATTERN = (
        r"(\d{2}[-/](?:[A-Za-z]{3}|\d{2})[-/]\d{2,4}|[A-Za-z]{3,9}[ \t]+\d{1,2},[ \t]+\d{4})"
        r"[ \t]+(.{10,60}?)[ \t]+"
        r"(?:Rs\.?|₹)?[ \t]*([\d,]+\.\d{2})(?:[ \t]*(Cr|Dr)\b)?"
    )
