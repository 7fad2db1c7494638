"""Account store package."""

from novabank.store.account_store import (
    BALANCE_KEY,
    DEFAULT_TRANSFER_DELAY,
    TRANSACTIONS_KEY,
    TRANSFER_CATEGORY,
    AccountStore,
    StoreNotReadyError,
    describe_transfer,
)
from novabank.store.ledger import (
    SAVINGS_RATE_PLACEHOLDER,
    compute_stats,
    daily_spending,
    search_transactions,
)
from novabank.store.seed import SEED_BALANCE, seed_transactions

__all__ = [
    "BALANCE_KEY",
    "DEFAULT_TRANSFER_DELAY",
    "TRANSACTIONS_KEY",
    "TRANSFER_CATEGORY",
    "AccountStore",
    "StoreNotReadyError",
    "describe_transfer",
    "SAVINGS_RATE_PLACEHOLDER",
    "compute_stats",
    "daily_spending",
    "search_transactions",
    "SEED_BALANCE",
    "seed_transactions",
]
