"""SBI Card parser refinement.

Overrides date parsing and the transaction row pattern to handle SBI's
formats. Everything else uses GenericParser defaults.
"""

from datetime import date

from statement_parser.parsers.dates import parse_date_with_format
from statement_parser.parsers.detector import DetectionRule
from statement_parser.parsers.generic import (
    AMOUNT_TOKEN,
    CREDIT_LIMIT_LABEL,
    DATE_TOKEN,
    FieldSpec,
    GenericParser,
)


class SBIParser(GenericParser):
    """Parser refinement for SBI Card statements.

    SBI-specific behaviors:
    - Card number format: XXXX XXXX XXXX 1234 (or with dashes)
    - Transaction rows use a 2-digit year: "15 Jan 24"
    - Transaction amounts end in "C" (credit) or "D" (debit)
    """

    name = "SBI Card"
    detection = DetectionRule(
        brands=(r"SBI\s+Card", r"sbicard\.com", r"State\s+Bank\s+of\s+India"),
        qualified=(r"\bSBI\b",),
        context=(r"CREDIT\s+CARD",),
    )

    CARD = FieldSpec(
        patterns=(
            r"Card\s+(?:Number|No\.?)\s*:?\s*((?:[X*]{4}[\s-]+){3}\d{4})",
            r"[X*]{4}[\s-]+[X*]{4}[\s-]+[X*]{4}[\s-]+(\d{4})",
            r"(?:ending|ends)\s+(?:in|with)\s*:?\s*(\d{4})",
        ),
        keywords=("Credit Card Number", "Card Number", "Card No"),
        region="account",
    )
    STATEMENT_DATE = FieldSpec(
        patterns=(rf"Statement\s+Date\s*[:\-]?\s*{DATE_TOKEN}",),
        keywords=("Statement Date",),
        region="header",
        heuristic="first_date",
    )
    DUE_DATE = FieldSpec(
        patterns=(rf"Payment\s+Due\s+Date\s*[:\-]?\s*{DATE_TOKEN}",),
        keywords=("Payment Due Date", "Due Date"),
        region="account",
    )
    TOTAL_DUE = FieldSpec(
        patterns=(rf"Total\s+Amount\s+Due\s*[:\-]?\s*{AMOUNT_TOKEN}",),
        keywords=("Total Amount Due", "Total Outstanding", "Amount Due"),
        region="account",
        heuristic="largest_amount",
    )
    MINIMUM_DUE = FieldSpec(
        patterns=(rf"Minimum\s+Amount\s+Due\s*[:\-]?\s*{AMOUNT_TOKEN}",),
        keywords=("Minimum Amount Due", "Minimum Due"),
        region="account",
    )
    CREDIT_LIMIT = FieldSpec(
        patterns=(rf"{CREDIT_LIMIT_LABEL}\s*[:\-]?\s*{AMOUNT_TOKEN}",),
        keywords=("Credit Limit",),
        region="account",
        not_after=("Available",),
    )
    AVAILABLE_CREDIT = FieldSpec(
        patterns=(rf"Available\s+Credit\s+Limit\s*[:\-]?\s*{AMOUNT_TOKEN}",),
        keywords=("Available Credit Limit", "Available Credit"),
        region="account",
    )

    KNOWN_VARIANTS = (
        "SimplySAVE",
        "SimplyCLICK",
        "Cashback",
        "ELITE",
        "PRIME",
        "BPCL",
        "IRCTC",
        "Pulse",
    )
    VARIANT_NOISE = r"\b(?:credit|card|sbi)\b"

    TRANSACTION_PATTERN = (
        r"(\d{1,2}[ \t]+[A-Za-z]{3}[ \t]+\d{2,4})[ \t]+(.{10,60}?)[ \t]+"
        r"(?:Rs\.?|₹)?[ \t]*([\d,]+\.\d{2})(?:[ \t]*(C|D|Cr|Dr)\b)?"
    )
    CREDIT_MARKERS = ("cr", "c")

    def _parse_date(self, text: str) -> date | None:
        """Parse SBI dates, including the 2-digit-year row format.

        SBI commonly uses:
        - DD MMM YY (e.g., "15 Dec 23") on transaction rows
        - DD MMM YYYY or DD/MM/YYYY in the summary box
        """
        return parse_date_with_format(text, "%d %b %y") or super()._parse_date(text)
