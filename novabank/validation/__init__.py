"""Validation package."""

from novabank.validation.transfer import (
    INSUFFICIENT_FUNDS_MESSAGE,
    INVALID_AMOUNT_MESSAGE,
    MISSING_RECIPIENT_MESSAGE,
    TransferFormValidator,
)

__all__ = [
    "INSUFFICIENT_FUNDS_MESSAGE",
    "INVALID_AMOUNT_MESSAGE",
    "MISSING_RECIPIENT_MESSAGE",
    "TransferFormValidator",
]
