"""
Data Models Package

This package contains all Pydantic models used in NovaBank.
All data flowing through the system must conform to these schemas.
"""

from novabank.models.account import (
    AccountSnapshot,
    AccountStats,
    Transaction,
    TransactionType,
)
from novabank.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from novabank.models.chat import (
    AdviceContext,
    AdviceTurn,
    ChatMessage,
    ChatRole,
)
from novabank.models.transfer import (
    TransferOutcome,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Account models
    "AccountSnapshot",
    "AccountStats",
    "Transaction",
    "TransactionType",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    # Chat models
    "AdviceContext",
    "AdviceTurn",
    "ChatMessage",
    "ChatRole",
    # Transfer models
    "TransferOutcome",
    "ValidationIssue",
    "ValidationResult",
]
