"""
Seed Data

Used when nothing has been persisted yet, so a first visit never shows
an empty account.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional

from novabank.models.account import Transaction, TransactionType


SEED_BALANCE = Decimal("12450.00")


def seed_transactions(now: Optional[datetime] = None) -> list[Transaction]:
    """
    The five demo transactions, newest first.

    Dates are relative to `now` so the demo always looks recent.
    """
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)

    return [
        Transaction(
            id="1",
            description="Starbucks Coffee",
            category="Food & Drink",
            amount=Decimal("-12.50"),
            date=now,
            type=TransactionType.DEBIT,
        ),
        Transaction(
            id="2",
            description="Shell Gas Station",
            category="Transport",
            amount=Decimal("-55.00"),
            date=now - timedelta(hours=2),
            type=TransactionType.DEBIT,
        ),
        Transaction(
            id="3",
            description="Monthly Salary Deposit",
            category="Income",
            amount=Decimal("4500.00"),
            date=now - timedelta(days=1),
            type=TransactionType.CREDIT,
        ),
        Transaction(
            id="4",
            description="Apple Online Store",
            category="Shopping",
            amount=Decimal("-1299.00"),
            date=now - timedelta(days=2),
            type=TransactionType.DEBIT,
        ),
        Transaction(
            id="5",
            description="Utility Bill - Power & Water",
            category="Bills",
            amount=Decimal("-210.40"),
            date=now - timedelta(days=3),
            type=TransactionType.DEBIT,
        ),
    ]
