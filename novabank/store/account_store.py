"""
Account Store

The single source of truth for balance and transaction history within
one session.

DESIGN DECISION: The store is an ordinary object, created by the
application root and handed to whoever needs it. There is no module-level
instance.

CONTRACT:
1. hydrate() runs once; nothing can be read before it finishes
2. transfer() is the only mutation
3. Every mutation is written back to storage; hydration never is
4. A storage failure is logged, never raised to the caller

CONCURRENCY:
transfer() suspends for a simulated processing delay after checking the
balance. Two transfers started together both check against the same
balance and can both succeed. Pass serialize_transfers=True to queue them
behind a lock instead.
"""

import asyncio
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional, Union
from uuid import uuid4

from pydantic import TypeAdapter, ValidationError

from novabank.audit import AuditLogger
from novabank.config import BankingSettings
from novabank.models.account import (
    AccountSnapshot,
    AccountStats,
    Transaction,
    TransactionType,
)
from novabank.models.audit import AuditEventBuilder
from novabank.services.storage import KeyValueStorageInterface, StorageError
from novabank.store.ledger import compute_stats
from novabank.store.seed import SEED_BALANCE, seed_transactions


BALANCE_KEY = "nova_balance"
TRANSACTIONS_KEY = "nova_transactions"
DEFAULT_TRANSFER_DELAY = 1.8
TRANSFER_CATEGORY = "Transfer"

AmountLike = Union[Decimal, int, float, str]

_TRANSACTION_LIST = TypeAdapter(list[Transaction])


class StoreNotReadyError(RuntimeError):
    """The store was read before hydration finished."""
    pass


def _local_now() -> datetime:
    return datetime.now().astimezone()


def _new_transaction_id() -> str:
    return uuid4().hex[:9].upper()


def _coerce_amount(amount: AmountLike) -> Optional[Decimal]:
    """Convert caller input to a finite Decimal, or None."""
    if isinstance(amount, bool):
        return None
    try:
        if isinstance(amount, Decimal):
            value = amount
        elif isinstance(amount, float):
            value = Decimal(str(amount))
        elif isinstance(amount, str):
            value = Decimal(amount.strip())
        else:
            value = Decimal(amount)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not value.is_finite():
        return None
    return value


def describe_transfer(recipient: str, note: str) -> str:
    """'Transfer to {recipient}', plus ': {note}' when there is a note."""
    description = f"Transfer to {recipient}"
    if note:
        description += f": {note}"
    return description


class AccountStore:
    """
    Holds balance and history, derives stats, performs transfers.

    Usage:
        store = AccountStore.open(storage)
        snapshot = store.get_snapshot()
        ok = await store.transfer("alice@example.com", Decimal("500"), "rent")
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        *,
        seed_balance: Decimal = SEED_BALANCE,
        transfer_delay: float = DEFAULT_TRANSFER_DELAY,
        serialize_transfers: bool = False,
        balance_key: str = BALANCE_KEY,
        transactions_key: str = TRANSACTIONS_KEY,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Initialize the store. Call hydrate() (or use open()) before reading.

        Args:
            storage: Durable key-value storage
            seed_balance: Balance used when none is persisted
            transfer_delay: Simulated processing latency in seconds
            serialize_transfers: Queue concurrent transfers behind a lock
            clock: Returns "now"; stats use its timezone for month boundaries
            id_factory: Generates transaction IDs
            audit_logger: Where events go; a local one is created if None
        """
        if transfer_delay < 0:
            raise ValueError("transfer_delay cannot be negative")

        self._storage = storage
        self._seed_balance = seed_balance
        self._transfer_delay = transfer_delay
        self._balance_key = balance_key
        self._transactions_key = transactions_key
        self._clock = clock or _local_now
        self._id_factory = id_factory or _new_transaction_id
        self._audit_logger = audit_logger or AuditLogger()
        self._transfer_lock = asyncio.Lock() if serialize_transfers else None

        self._balance: Decimal = seed_balance
        self._transactions: list[Transaction] = []
        self._is_loading = True

    @classmethod
    def open(
        cls,
        storage: KeyValueStorageInterface,
        **kwargs,
    ) -> "AccountStore":
        """Create a store and hydrate it from storage."""
        store = cls(storage, **kwargs)
        store.hydrate()
        return store

    @classmethod
    def from_settings(
        cls,
        storage: KeyValueStorageInterface,
        settings: BankingSettings,
        audit_logger: Optional[AuditLogger] = None,
    ) -> "AccountStore":
        """Create and hydrate a store configured from BankingSettings."""
        return cls.open(
            storage,
            seed_balance=settings.seed_balance,
            transfer_delay=settings.transfer_delay_seconds,
            serialize_transfers=settings.serialize_transfers,
            balance_key=settings.balance_key,
            transactions_key=settings.transactions_key,
            audit_logger=audit_logger,
        )

    # -------------------------------------------------------------------------
    # Hydration and persistence
    # -------------------------------------------------------------------------

    @property
    def is_loading(self) -> bool:
        """True until hydration has finished."""
        return self._is_loading

    def hydrate(self) -> None:
        """
        Populate state from storage, falling back to seed data.

        Does not write anything back. Calling it again is a no-op.
        """
        if not self._is_loading:
            return

        balance, seeded_balance = self._load_balance()
        transactions, seeded_transactions = self._load_transactions()

        self._balance = balance
        self._transactions = transactions
        self._is_loading = False

        self._audit_logger.log(AuditEventBuilder.store_hydrated(
            balance=balance,
            transaction_count=len(transactions),
            used_seed_balance=seeded_balance,
            used_seed_transactions=seeded_transactions,
        ))

    def _load_balance(self) -> tuple[Decimal, bool]:
        saved = self._storage.get_item(self._balance_key)
        if saved is None:
            return self._seed_balance, True

        value = _coerce_amount(saved)
        if value is None:
            self._audit_logger.log(AuditEventBuilder.storage_parse_failed(
                key=self._balance_key,
                error=f"not a decimal: {saved[:50]!r}",
            ))
            return self._seed_balance, True
        return value, False

    def _load_transactions(self) -> tuple[list[Transaction], bool]:
        saved = self._storage.get_item(self._transactions_key)
        if not saved:
            return seed_transactions(self._clock()), True

        try:
            return _TRANSACTION_LIST.validate_json(saved), False
        except ValidationError as e:
            self._audit_logger.log(AuditEventBuilder.storage_parse_failed(
                key=self._transactions_key,
                error=f"{e.error_count()} validation error(s)",
            ))
            return seed_transactions(self._clock()), True

    def _persist(self) -> None:
        """
        Write balance and history back in one storage change.

        Failures are logged only. Both keys are written together so a
        failed write never leaves a balance that disagrees with the
        stored history.
        """
        try:
            self._storage.set_items({
                self._balance_key: str(self._balance),
                self._transactions_key: _TRANSACTION_LIST.dump_json(
                    self._transactions
                ).decode("utf-8"),
            })
        except StorageError as e:
            self._audit_logger.log(AuditEventBuilder.persist_failed(str(e)))

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def _require_ready(self) -> None:
        if self._is_loading:
            raise StoreNotReadyError("Account store has not been hydrated yet")

    @property
    def balance(self) -> Decimal:
        self._require_ready()
        return self._balance

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """History, newest first."""
        self._require_ready()
        return tuple(self._transactions)

    @property
    def stats(self) -> AccountStats:
        self._require_ready()
        return compute_stats(self._balance, self._transactions, self._clock())

    def get_snapshot(self) -> AccountSnapshot:
        """Balance, history and freshly computed stats. No side effects."""
        self._require_ready()
        now = self._clock()
        return AccountSnapshot(
            balance=self._balance,
            transactions=tuple(self._transactions),
            stats=compute_stats(self._balance, self._transactions, now),
            taken_at=now,
        )

    # -------------------------------------------------------------------------
    # Transfer
    # -------------------------------------------------------------------------

    async def transfer(
        self,
        recipient: str,
        amount: AmountLike,
        note: str = "",
    ) -> bool:
        """
        Send money out of the account.

        Returns False immediately (no delay, no write) when the amount is
        not positive or exceeds the balance. Otherwise waits out the
        processing delay, records a DEBIT, persists, and returns True.

        No recipient validation and no idempotency: calling twice sends
        twice.
        """
        self._require_ready()

        if self._transfer_lock is None:
            return await self._transfer(recipient, amount, note)

        async with self._transfer_lock:
            return await self._transfer(recipient, amount, note)

    async def _transfer(
        self,
        recipient: str,
        amount: AmountLike,
        note: str,
    ) -> bool:
        value = _coerce_amount(amount)
        shown = str(value) if value is not None else repr(amount)
        self._audit_logger.log(AuditEventBuilder.transfer_requested(recipient, shown))

        reason = None
        if value is None or value <= 0:
            reason = "amount must be greater than zero"
        elif value > self._balance:
            reason = "insufficient funds"

        if reason:
            self._audit_logger.log(AuditEventBuilder.transfer_rejected(
                recipient=recipient,
                amount=shown,
                reason=reason,
                balance=self._balance,
            ))
            return False

        await asyncio.sleep(self._transfer_delay)

        transaction = Transaction(
            id=self._id_factory(),
            description=describe_transfer(recipient, note),
            category=TRANSFER_CATEGORY,
            amount=-value,
            date=self._clock().astimezone(timezone.utc),
            type=TransactionType.DEBIT,
        )

        # Balance and history change together, after the delay
        self._balance = self._balance - value
        self._transactions = [transaction, *self._transactions]
        self._persist()

        self._audit_logger.log(AuditEventBuilder.transfer_completed(
            transaction_id=transaction.id,
            amount=value,
            new_balance=self._balance,
        ))
        return True
