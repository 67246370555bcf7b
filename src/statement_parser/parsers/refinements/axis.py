"""Axis Bank parser refinement."""

from statement_parser.parsers.detector import DetectionRule
from statement_parser.parsers.generic import (
    AMOUNT_TOKEN,
    CREDIT_LIMIT_LABEL,
    FieldSpec,
    GenericParser,
)

AXIS_DATE = r"(\d{2}/\d{2}/\d{4})"


class AxisParser(GenericParser):
    """Parser refinement for Axis Bank credit card statements.

    Axis-specific behaviors:
    - Card number shows the first six digits: "534680******1234"
    - Numeric DD/MM/YYYY dates throughout
    - "Total Payment Due" / "Minimum Payment Due" labels
    """

    name = "Axis Bank"
    detection = DetectionRule(
        brands=(r"AXIS\s*BANK", r"axisbank\.com"),
        qualified=(r"\bAXIS\b",),
        context=(r"CREDIT\s+CARD",),
    )

    CARD = FieldSpec(
        patterns=(
            r"Card\s+(?:Number|No\.?)\s*:?\s*(\d{4,6}[X*]{6,8}\d{4})",
            r"(\d{6}[X*]{6}\d{4})",
        ),
        keywords=("Card Number", "Card No"),
        region="account",
    )
    VARIANT = FieldSpec(
        keywords=("Card Type", "Card Variant", "Product"),
        region="header",
    )
    STATEMENT_DATE = FieldSpec(
        patterns=(rf"Statement\s+(?:Generation\s+)?Date\s*:?\s*{AXIS_DATE}",),
        keywords=("Statement Generation Date", "Statement Date"),
        region="header",
        heuristic="first_date",
    )
    DUE_DATE = FieldSpec(
        patterns=(rf"Payment\s+Due\s+Date\s*:?\s*{AXIS_DATE}",),
        keywords=("Payment Due Date", "Due Date"),
        region="account",
    )
    TOTAL_DUE = FieldSpec(
        patterns=(rf"Total\s+(?:Payment|Amount)\s+Due\s*:?\s*{AMOUNT_TOKEN}",),
        keywords=("Total Payment Due", "Total Amount Due", "Amount Due"),
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
    AVAILABLE_CREDIT = FieldSpec(
        patterns=(rf"Available\s+Credit\s+Limit\s*:?\s*{AMOUNT_TOKEN}",),
        keywords=("Available Credit Limit", "Available Credit"),
        region="account",
    )

    KNOWN_VARIANTS = (
        "Flipkart",
        "ACE",
        "Magnus",
        "Atlas",
        "Select",
        "Neo",
        "My Zone",
        "Privilege",
        "Vistara",
    )
    VARIANT_NOISE = r"\b(?:credit|card|axis|bank)\b"
