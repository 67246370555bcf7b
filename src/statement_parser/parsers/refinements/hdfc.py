"""HDFC Bank parser refinement.

HDFC statements put the masked card number, product name and dues in a
boxed summary near the top of page 1, and list transactions in a ruled
table. This refinement carries the widest label vocabulary of all
issuers and reads transactions from table rows first.
"""

from statement_parser.parsers.detector import DetectionRule
from statement_parser.parsers.generic import (
    AMOUNT_TOKEN,
    CREDIT_LIMIT_LABEL,
    DATE_TOKEN,
    FieldSpec,
    GenericParser,
)


class HDFCParser(GenericParser):
    """Parser refinement for HDFC Bank credit card statements.

    HDFC-specific behaviors:
    - Card number printed as "XXXX XXXX XXXX 1234" or "************1234"
    - Many synonymous labels for dates and dues across statement generations
    - Transactions taken from table rows (positioned lines), text as fallback
    """

    name = "HDFC Bank"
    detection = DetectionRule(
        brands=(r"HDFC\s*BANK", r"hdfcbank\.com"),
        qualified=(r"\bHDFC\b",),
    )

    CARD = FieldSpec(
        patterns=(
            r"Card\s+Number\s*:?\s*(?:X+\s*){3}(\d{4})",
            r"Card\s+No\.?\s*:?\s*(?:[X*]\s*){12}(\d{4})",
            r"(?:ending|ends)\s+(?:in|with)\s*:?\s*(\d{4})",
            r"\*{12}(\d{4})",
            r"XXXX\s+XXXX\s+XXXX\s+(\d{4})",
        ),
        keywords=("Card Number", "Card No"),
        region="account",
    )
    VARIANT = FieldSpec(
        keywords=("Card Type", "Product", "Card Variant", "Card Name", "Card Product"),
        region="header",
    )
    STATEMENT_DATE = FieldSpec(
        patterns=(rf"Statement\s+Date\s*:?\s*{DATE_TOKEN}",),
        keywords=("Statement Date", "Date of Statement", "Statement Period", "Bill Date"),
        region="header",
        heuristic="first_date",
    )
    DUE_DATE = FieldSpec(
        patterns=(rf"Payment\s+Due\s+Date\s*:?\s*{DATE_TOKEN}",),
        keywords=(
            "Payment Due Date",
            "Due Date",
            "Pay By",
            "Payment Due By",
            "Last Date of Payment",
            "Payment Deadline",
        ),
        region="account",
    )
    TOTAL_DUE = FieldSpec(
        patterns=(rf"Total\s+Amount\s+Due\s*:?\s*{AMOUNT_TOKEN}",),
        keywords=(
            "Total Amount Due",
            "Amount Due",
            "Outstanding Balance",
            "Total Outstanding",
            "Payment Amount",
            "Amount Payable",
        ),
        region="account",
        heuristic="largest_amount",
    )
    MINIMUM_DUE = FieldSpec(
        patterns=(rf"Minimum\s+Amount\s+Due\s*:?\s*{AMOUNT_TOKEN}",),
        keywords=("Minimum Amount Due", "Minimum Due", "Min. Amount Due"),
        region="account",
    )
    CREDIT_LIMIT = FieldSpec(
        patterns=(rf"{CREDIT_LIMIT_LABEL}\s*:?\s*{AMOUNT_TOKEN}",),
        keywords=("Credit Limit", "Total Limit", "Card Limit"),
        region="account",
        not_after=("Available",),
    )
    AVAILABLE_CREDIT = FieldSpec(
        patterns=(rf"Available\s+Credit\s+Limit\s*:?\s*{AMOUNT_TOKEN}",),
        keywords=("Available Credit", "Available Limit", "Credit Available"),
        region="account",
    )

    KNOWN_VARIANTS = (
        "MoneyBack+",
        "MoneyBack",
        "Regalia First",
        "Regalia Gold",
        "Regalia",
        "Diners Club Black",
        "Diners Club",
        "Diners Black",
        "Infinia",
        "Millennia",
        "Freedom",
        "Platinum",
        "Titanium",
        "Visa Signature",
        "World MasterCard",
    )
    VARIANT_NOISE = r"\b(?:credit|card|hdfc|bank)\b"

    TRANSACTION_MODE = "table"
