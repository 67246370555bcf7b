"""Internal data schemas for parsed statement data.

These models are the output of an issuer strategy. Amounts are kept as
Decimal in the statement's own currency; nothing is converted to minor units.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransactionType(str, Enum):
    """Kinds of ledger lines a statement can contain."""

    DEBIT = "DEBIT"
    CREDIT = "CREDIT"
    FEE = "FEE"


class TransactionRecord(BaseModel):
    """Represents a single transaction extracted from a statement."""

    model_config = ConfigDict(frozen=True)

    transaction_date: date = Field(..., description="Transaction date")
    posting_date: date | None = Field(None, description="Posting date (if printed)")
    description: str = Field(default="", description="Raw description text (may be empty)")
    merchant_name: str | None = Field(None, description="Merchant name (if known)")
    amount: Decimal = Field(..., description="Transaction amount (always positive)")
    type: TransactionType = Field(default=TransactionType.DEBIT, description="Ledger line kind")

    @field_validator("description", mode="before")
    @classmethod
    def description_not_none(cls, v: Any) -> str:
        """Normalize a missing description to an empty string."""
        if v is None:
            return ""
        return str(v).strip()


class StatementRecord(BaseModel):
    """Represents a complete parsed credit card statement.

    Built once by the issuer strategy after all field extractors have run,
    then frozen.
    """

    model_config = ConfigDict(frozen=True)

    # Required for validity
    card_last_four: str | None = Field(None, description="Last 4 digits of card number")
    total_amount_due: Decimal | None = Field(None, description="Total amount due")
    payment_due_date: date | None = Field(None, description="Payment due date")

    # Optional fields
    card_variant: str | None = Field(None, description="Card product name (e.g. Regalia)")
    statement_date: date | None = Field(None, description="Statement generation date")
    credit_limit: Decimal | None = Field(None, description="Total credit limit")
    available_credit: Decimal | None = Field(None, description="Available credit limit")
    minimum_amount_due: Decimal | None = Field(None, description="Minimum amount due")
    issuer_name: str | None = Field(None, description="Issuer that produced the statement")
    cardholder_name: str | None = Field(None, description="Name printed on the statement")

    transactions: tuple[TransactionRecord, ...] = Field(
        default_factory=tuple,
        description="Transactions in document order",
    )

    @field_validator("card_last_four")
    @classmethod
    def validate_last_four(cls, v: str | None) -> str | None:
        """Ensure card last four is exactly four digits."""
        if v is None:
            return v
        if len(v) != 4 or not v.isdigit():
            raise ValueError("Card last four must be exactly 4 digits")
        return v

    def is_valid(self) -> bool:
        """Check whether card number, total due and due date were all found."""
        return (
            self.card_last_four is not None
            and self.total_amount_due is not None
            and self.payment_due_date is not None
        )

    def to_summary(self) -> dict[str, Any]:
        """Return the five key data points as a plain dict."""
        return {
            "card_last_four": self.card_last_four,
            "card_variant": self.card_variant,
            "statement_date": self.statement_date,
            "payment_due_date": self.payment_due_date,
            "total_amount_due": self.total_amount_due,
        }
