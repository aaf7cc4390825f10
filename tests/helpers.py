"""Small builders shared by the test modules."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from finance_tracker.models import Category, Transaction, TransactionType

# Reference date pinned for every period-dependent test
TODAY = date(2024, 7, 15)


def make_tx(
    id: str,
    amount: Any,
    type_: str = "Expense",
    category: str = "Food",
    when: str = "2024-01-02",
    title: str | None = None,
) -> Transaction:
    """Build a Transaction directly, skipping the store."""
    return Transaction(
        id=id,
        title=title or f"tx-{id}",
        amount=Decimal(str(amount)),
        category=Category(category),
        type=TransactionType(type_),
        date=date.fromisoformat(when),
    )


def record(title: str = "Coffee", amount: Any = "120", category: str = "Food", type_: str = "Expense", when: str = "2024-07-10") -> dict:
    """Raw form-style values for TransactionStore.add()."""
    return {"title": title, "amount": amount, "category": category, "type": type_, "date": when}
