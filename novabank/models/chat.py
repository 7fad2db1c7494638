"""
Chat Models for the Financial Advisor

The advisor itself is stateless. Everything the conversation needs to
remember lives in these models, held by the caller.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from novabank.models.account import AccountSnapshot, Transaction


class ChatRole(str, Enum):
    """Who said it. Values match the roles the Gemini API expects."""
    USER = "user"
    MODEL = "model"


class AdviceTurn(BaseModel):
    """One prior turn of conversation, as sent to the advice service."""
    model_config = ConfigDict(frozen=True)

    role: ChatRole
    text: str


class ChatMessage(AdviceTurn):
    """A message shown in the chat view."""

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def to_turn(self) -> AdviceTurn:
        return AdviceTurn(role=self.role, text=self.text)


class AdviceContext(BaseModel):
    """
    Read-only view of account data handed to the advisor.

    Only the newest few transactions end up in the prompt; callers can
    pass the full history.
    """
    model_config = ConfigDict(frozen=True)

    balance: Decimal
    recent_transactions: tuple[Transaction, ...] = ()

    @classmethod
    def from_snapshot(cls, snapshot: AccountSnapshot) -> "AdviceContext":
        return cls(
            balance=snapshot.balance,
            recent_transactions=snapshot.transactions,
        )
