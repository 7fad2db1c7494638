"""
Audit Models for NovaBank

Every state change and every call to the advisor produces an event.
This provides:
1. A trace of what happened to the balance and why
2. Debugging information when storage or the advisor misbehaves

DESIGN DECISION: Events are local log records only. They are never
persisted next to the account data.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Store lifecycle
    STORE_HYDRATED = "store_hydrated"
    STORAGE_PARSE_FAILED = "storage_parse_failed"
    PERSIST_FAILED = "persist_failed"

    # Transfers
    TRANSFER_REQUESTED = "transfer_requested"
    TRANSFER_REJECTED = "transfer_rejected"
    TRANSFER_COMPLETED = "transfer_completed"

    # Advisor
    ADVICE_REQUESTED = "advice_requested"
    ADVICE_RECEIVED = "advice_received"
    ADVICE_FAILED = "advice_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    entity_id: Optional[str] = Field(
        default=None,
        description="Transaction ID or storage key this event relates to"
    )
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None
    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


DESCRIPTION_TEXT_LIMIT = 60


def _shorten(text: str, limit: int = DESCRIPTION_TEXT_LIMIT) -> str:
    """Clip free text for a description; the full value goes in details."""
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transfer_completed(tx_id, amount, balance)
    """

    @staticmethod
    def store_hydrated(
        balance: Decimal,
        transaction_count: int,
        used_seed_balance: bool,
        used_seed_transactions: bool,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_HYDRATED,
            description=f"Account store ready with {transaction_count} transactions",
            details={
                "balance": str(balance),
                "transaction_count": transaction_count,
                "seed_balance": used_seed_balance,
                "seed_transactions": used_seed_transactions,
            },
        )

    @staticmethod
    def storage_parse_failed(key: str, error: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_PARSE_FAILED,
            severity=AuditSeverity.WARNING,
            entity_id=key,
            description=f"Stored value for '{_shorten(key)}' is unreadable, using seed data",
            error_message=error,
        )

    @staticmethod
    def persist_failed(error: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSIST_FAILED,
            severity=AuditSeverity.ERROR,
            description="Could not write account state to storage",
            error_message=error,
        )

    @staticmethod
    def transfer_requested(recipient: str, amount: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSFER_REQUESTED,
            description=f"Transfer of {_shorten(amount)} to {_shorten(recipient)} requested",
            details={"recipient": recipient, "amount": amount},
            is_user_action=True,
        )

    @staticmethod
    def transfer_rejected(
        recipient: str,
        amount: str,
        reason: str,
        balance: Decimal,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSFER_REJECTED,
            severity=AuditSeverity.WARNING,
            description=f"Transfer to {_shorten(recipient)} rejected: {reason}",
            details={
                "recipient": recipient,
                "amount": amount,
                "reason": reason,
                "balance": str(balance),
            },
        )

    @staticmethod
    def transfer_completed(
        transaction_id: str,
        amount: Decimal,
        new_balance: Decimal,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSFER_COMPLETED,
            entity_id=transaction_id,
            description=f"Transfer of {amount} completed",
            details={
                "amount": str(amount),
                "new_balance": str(new_balance),
            },
        )

    @staticmethod
    def advice_requested(model_name: str, history_length: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ADVICE_REQUESTED,
            description="Advice requested from the advisor model",
            details={
                "model": model_name,
                "history_length": history_length,
            },
            is_user_action=True,
        )

    @staticmethod
    def advice_received(reply_length: int, used_fallback: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ADVICE_RECEIVED,
            description="Advisor replied",
            details={
                "reply_length": reply_length,
                "used_fallback": used_fallback,
            },
        )

    @staticmethod
    def advice_failed(error_type: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ADVICE_FAILED,
            severity=AuditSeverity.ERROR,
            description=f"Advisor call failed: {error_type}",
            details={"error_type": error_type},
            error_message=error_message,
        )
