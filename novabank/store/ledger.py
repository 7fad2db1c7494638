"""
Ledger Calculations

Pure functions over a list of transactions. Nothing here is cached:
the history is small, and recomputing on every read keeps the stats
impossible to get out of sync with the ledger.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Sequence

from novabank.models.account import AccountStats, Transaction, TransactionType


# Not computed from data. Shown as the "Savings Goal" card.
SAVINGS_RATE_PLACEHOLDER = Decimal("45.2")

ZERO = Decimal("0")


def _in_month(tx_date: datetime, now: datetime) -> bool:
    """Same calendar month (and year) as `now`, in `now`'s timezone."""
    if now.tzinfo is not None:
        local = tx_date.astimezone(now.tzinfo)
    else:
        local = tx_date.astimezone().replace(tzinfo=None)
    return (local.year, local.month) == (now.year, now.month)


def monthly_total(
    transactions: Iterable[Transaction],
    tx_type: TransactionType,
    now: datetime,
) -> Decimal:
    """Sum of amounts of one type dated in the current calendar month."""
    return sum(
        (t.amount for t in transactions if t.type == tx_type and _in_month(t.date, now)),
        ZERO,
    )


def compute_stats(
    balance: Decimal,
    transactions: Sequence[Transaction],
    now: datetime,
) -> AccountStats:
    """
    Derive the dashboard figures.

    Income is the sum of this month's credits; expenses are the absolute
    sum of this month's debits.
    """
    return AccountStats(
        total_balance=balance,
        monthly_income=monthly_total(transactions, TransactionType.CREDIT, now),
        monthly_expenses=abs(monthly_total(transactions, TransactionType.DEBIT, now)),
        savings_rate=SAVINGS_RATE_PLACEHOLDER,
    )


def search_transactions(
    transactions: Sequence[Transaction],
    term: str,
) -> list[Transaction]:
    """Case-insensitive match on description or category. Order is kept."""
    needle = term.strip().lower()
    if not needle:
        return list(transactions)
    return [
        t for t in transactions
        if needle in t.description.lower() or needle in t.category.lower()
    ]


def daily_spending(
    transactions: Iterable[Transaction],
    now: datetime,
    days: int = 7,
) -> list[tuple[str, Decimal]]:
    """
    Debits per day for the last `days` days, oldest first.

    Labels are short weekday names ("Mon", "Tue", ...).
    """
    today = now.date()
    buckets: dict = {today - timedelta(days=i): ZERO for i in range(days)}

    for t in transactions:
        if t.type != TransactionType.DEBIT:
            continue
        local = t.date.astimezone(now.tzinfo) if now.tzinfo else t.date
        day = local.date()
        if day in buckets:
            buckets[day] += abs(t.amount)

    return [(day.strftime("%a"), buckets[day]) for day in sorted(buckets)]
