"""
Main Orchestrator for NovaBank

This module ties together all the components and defines the flows the
UI drives:
1. Transfer (form → validate → store.transfer → outcome)
2. Advice (message → AdvisorConversation → AdviceClient)

DESIGN DECISION: The application root builds one AccountStore and passes
it to every flow. Nothing reaches for a global.
"""

from decimal import Decimal
from typing import Optional, Union

import structlog

from novabank.agents import AdviceClient, AdvisorConversation, default_greeting
from novabank.audit import AuditLogger
from novabank.config import Settings, get_settings
from novabank.models.transfer import TransferOutcome
from novabank.services.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorageInterface,
)
from novabank.store import AccountStore
from novabank.validation import TransferFormValidator


TRANSFER_FAILED_MESSAGE = "Transfer failed. Please try again."

logger = structlog.get_logger(__name__)


class TransferFlow:
    """
    Orchestrates the transfer form.

    Flow:
    1. Validate → user-facing message on failure, store untouched
    2. Transfer → store applies the simulated delay and records the DEBIT
    3. Outcome → success with the new transaction, or a retry message
    """

    def __init__(
        self,
        store: AccountStore,
        validator: Optional[TransferFormValidator] = None,
    ):
        self._store = store
        self._validator = validator or TransferFormValidator()

    async def submit(
        self,
        recipient: str,
        raw_amount: Union[str, Decimal, int, float],
        note: str = "",
    ) -> TransferOutcome:
        validation = self._validator.validate(
            recipient=recipient,
            raw_amount=raw_amount,
            balance=self._store.balance,
        )
        if not validation.is_valid:
            return TransferOutcome(
                succeeded=False,
                error_message=validation.first_error,
            )

        succeeded = await self._store.transfer(recipient, validation.amount, note)
        if not succeeded:
            return TransferOutcome(
                succeeded=False,
                error_message=TRANSFER_FAILED_MESSAGE,
            )

        return TransferOutcome(
            succeeded=True,
            transaction=self._store.transactions[0],
        )


def create_storage(settings: Settings) -> KeyValueStorageInterface:
    """File-backed storage at the configured path."""
    return JsonFileKeyValueStorage(settings.banking.data_path)


def create_app_components(
    storage: Optional[KeyValueStorageInterface] = None,
    settings: Optional[Settings] = None,
    advice_client: Optional[AdviceClient] = None,
) -> tuple[AccountStore, TransferFlow, AdvisorConversation]:
    """
    Factory function to create all application components.

    Args:
        storage: Storage backend. Defaults to the JSON file from settings;
                 falls back to in-memory storage if that cannot be set up.
        settings: Settings to use; the cached settings if None
        advice_client: Advisor client; built from settings if None

    Returns:
        (account_store, transfer_flow, advisor_conversation)
    """
    settings = settings or get_settings()
    audit_logger = AuditLogger()

    if storage is None:
        try:
            storage = create_storage(settings)
        except Exception as e:
            # Storage not configured - continue without persistence
            logger.warning("storage_unavailable", error=str(e))
            storage = InMemoryKeyValueStorage()

    store = AccountStore.from_settings(
        storage,
        settings.banking,
        audit_logger=audit_logger,
    )

    advice_client = advice_client or AdviceClient(
        settings=settings.gemini,
        audit_logger=audit_logger,
    )
    conversation = AdvisorConversation(
        advice_client,
        greeting=default_greeting(settings.app.customer_name),
    )

    return store, TransferFlow(store), conversation
