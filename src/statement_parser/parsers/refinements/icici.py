"""ICICI Bank parser refinement."""

from statement_parser.parsers.detector import DetectionRule
from statement_parser.parsers.generic import (
    AMOUNT_TOKEN,
    CREDIT_LIMIT_LABEL,
    FieldSpec,
    GenericParser,
)

# ICICI prints dates as 15-Jan-2024 or 15/Jan/2024
ICICI_DATE = r"(\d{2}[-/][A-Za-z]{3}[-/]\d{4})"


class ICICIParser(GenericParser):
    """Parser refinement for ICICI Bank credit card statements.

    ICICI-specific behaviors:
    - Card number introduced by "Card Number" (often "4375 XXXX XXXX 1234")
      or "Card ending with"
    - Dates use abbreviated month names
    - "Amount Payable" as an alternative label for the total due
    """

    name = "ICICI Bank"
    detection = DetectionRule(
        brands=(r"ICICI\s*BANK", r"icicibank\.com"),
        qualified=(r"\bICICI\b",),
        context=(r"CREDIT\s+CARD",),
    )

    CARD = FieldSpec(
        patterns=(
            # Whole masked number; the first group of four may be unmasked
            r"Card\s+(?:Number|No\.?)\s*:?\s*((?:[\dX*]{4}[\s-]*){3}\d{4})(?!\d)",
            r"Card\s+ending\s+with\s*:?\s*[X*\s-]*(\d{4})\b",
        ),
        keywords=("Card Number", "Card No"),
        region="account",
    )
    VARIANT = FieldSpec(
        patterns=(r"(?:Card\s+Type|Product)\s*:?\s*([A-Za-z ]+?)\s*(?:\n|Card|$)",),
        keywords=("Card Type", "Product"),
        region="header",
    )
    STATEMENT_DATE = FieldSpec(
        patterns=(rf"Statement\s+Date\s*:?\s*{ICICI_DATE}",),
        keywords=("Statement Date", "Statement Generation Date"),
        region="header",
        heuristic="first_date",
    )
    DUE_DATE = FieldSpec(
        patterns=(rf"(?:Payment\s+Due\s+Date|Due\s+Date)\s*:?\s*{ICICI_DATE}",),
        keywords=("Payment Due Date", "Due Date"),
        region="account",
    )
    TOTAL_DUE = FieldSpec(
        patterns=(rf"(?:Total\s+Amount\s+Due|Amount\s+Payable)\s*:?\s*{AMOUNT_TOKEN}",),
        keywords=("Total Amount Due", "Amount Payable", "Total Dues"),
        region="account",
        heuristic="largest_amount",
    )
    MINIMUM_DUE = FieldSpec(
        patterns=(rf"Minimum\s+Amount\s+Due\s*:?\s*{AMOUNT_TOKEN}",),
        keywords=("Minimum Amount Due", "Minimum Due"),
        region="account",
    )
    CREDIT_LIMIT = FieldSpec(
        patterns=(rf"{CREDIT_LIMIT_LABEL}\s*:?\s*{AMOUNT_TOKEN}",),
        keywords=("Credit Limit",),
        region="account",
        not_after=("Available",),
    )

    KNOWN_VARIANTS = (
        "Amazon Pay",
        "Coral",
        "Rubyx",
        "Sapphiro",
        "Emeralde",
        "Platinum Chip",
        "HPCL Super Saver",
        "MakeMyTrip",
    )
    VARIANT_NOISE = r"\b(?:credit|card|icici|bank)\b"
