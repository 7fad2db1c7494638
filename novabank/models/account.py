"""
Account Data Models for NovaBank

These models define the schemas for the account ledger:
1. Transaction - one immutable ledger entry
2. AccountStats - figures derived from the ledger on every read
3. AccountSnapshot - what views get when they read the store

DESIGN DECISION: Amounts are Decimal, never float.
Balances are compared and subtracted, and a float drift of a cent
would break the "balance = seed + sum of applied amounts" invariant.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


# =============================================================================
# ENUMS
# =============================================================================

class TransactionType(str, Enum):
    """
    Direction of a transaction.

    Redundant with the sign of the amount, but stored explicitly
    and checked against it.
    """
    CREDIT = "CREDIT"  # Money in
    DEBIT = "DEBIT"    # Money out


# =============================================================================
# LEDGER MODELS
# =============================================================================

class Transaction(BaseModel):
    """
    A single ledger entry.

    Immutable once created. Serialized to JSON with `date` as an
    ISO-8601 string and `amount` as a decimal string.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique token"
    )
    date: datetime = Field(
        ...,
        description="When the transaction happened"
    )
    description: str = Field(
        ...,
        description="Free-text label"
    )
    category: str = Field(
        ...,
        description="Classification tag, e.g. 'Food & Drink' or 'Transfer'"
    )
    amount: Decimal = Field(
        ...,
        allow_inf_nan=False,
        description="Signed amount: positive is a credit, negative a debit"
    )
    type: TransactionType

    @field_validator('date')
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Naive timestamps are read as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @model_validator(mode='after')
    def validate_sign(self) -> 'Transaction':
        """The amount's sign must agree with the transaction type."""
        if self.type == TransactionType.CREDIT and self.amount < 0:
            raise ValueError("CREDIT transaction cannot have a negative amount")
        if self.type == TransactionType.DEBIT and self.amount > 0:
            raise ValueError("DEBIT transaction cannot have a positive amount")
        return self

    @property
    def is_credit(self) -> bool:
        return self.type == TransactionType.CREDIT


class AccountStats(BaseModel):
    """Figures derived from balance and history. Never persisted."""
    model_config = ConfigDict(frozen=True)

    total_balance: Decimal
    monthly_income: Decimal = Field(
        ...,
        description="Sum of CREDIT amounts in the current calendar month"
    )
    monthly_expenses: Decimal = Field(
        ...,
        ge=0,
        description="Absolute sum of DEBIT amounts in the current calendar month"
    )
    savings_rate: Decimal = Field(
        ...,
        description="Savings goal percentage (fixed placeholder)"
    )


class AccountSnapshot(BaseModel):
    """
    An immutable read of the account at one instant.

    Transactions are ordered newest first.
    """
    model_config = ConfigDict(frozen=True)

    balance: Decimal
    transactions: tuple[Transaction, ...]
    stats: AccountStats
    taken_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def recent_transactions(self, limit: int = 6) -> tuple[Transaction, ...]:
        return self.transactions[:limit]
