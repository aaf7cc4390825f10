# store.py
# Role: In-memory transaction store for one session, plus the seed data each
#       screen starts with. Replaces a database: records live in a plain list,
#       most recent first, and every mutation bumps a version counter that
#       derived views (the report cache) use to detect changes.

"""
In-memory storage for the finance tracker.

- TransactionStore: add / update / remove / get over an ordered list
- new_transaction_id(): time-based ids, monotonic within the process
- EXPENSES_SEED / REPORTS_SEED: demo data loaded into fresh sessions
"""

from __future__ import annotations

import time
from dataclasses import replace
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Tuple

from .errors import InvalidInput, NotFound
from .logging_setup import get_logger
from .models import Transaction, TransactionInput, build_transaction, validate_transaction

logger = get_logger(__name__)

EDITABLE_FIELDS = ("title", "amount", "category", "type", "date")


# -------------------------------------------------------------------
# Id generation
# -------------------------------------------------------------------

_last_id_ms = 0


def new_transaction_id() -> str:
    """
    Return a millisecond timestamp token, bumped past the previous one so
    two records created in the same millisecond still get distinct ids.
    """
    global _last_id_ms
    now_ms = time.time_ns() // 1_000_000
    _last_id_ms = max(now_ms, _last_id_ms + 1)
    return str(_last_id_ms)


# -------------------------------------------------------------------
# Store
# -------------------------------------------------------------------

class TransactionStore:
    """
    Authoritative list of transactions for one session.

    Ordering is most-recent-first: `add` prepends. Records are immutable,
    so `update` swaps in a new instance at the same position and leaves every
    other element untouched.
    """

    def __init__(self, records: Iterable[Mapping[str, Any]] = ()):
        self._items: List[Transaction] = []
        self.version = 0
        # Seed lists are already in display order, so append instead of add().
        for record in records:
            self._items.append(self._build_new(record))

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._items))

    def all(self) -> Tuple[Transaction, ...]:
        return tuple(self._items)

    def get(self, transaction_id: str) -> Transaction:
        return self._items[self._index_of(transaction_id)]

    def add(self, record: Mapping[str, Any] | TransactionInput) -> Transaction:
        """Validate and prepend a record, assigning an id when it has none."""
        tx = self._build_new(record)
        self._items.insert(0, tx)
        self.version += 1
        logger.info("Added transaction %s (%s %s %s)", tx.id, tx.type.value, tx.amount, tx.category.value)
        return tx

    def update(self, transaction_id: str, patch: Mapping[str, Any] | TransactionInput) -> Transaction:
        """
        Replace the record matching `transaction_id` with its fields overlaid
        by `patch`. The merged record is validated before anything changes.
        """
        index = self._index_of(transaction_id)
        current = self._items[index]

        if isinstance(patch, TransactionInput):
            patch = patch.model_dump()
        patch = dict(patch)

        patched_id = patch.pop("id", transaction_id)
        if str(patched_id) != transaction_id:
            raise InvalidInput({"id": "The id of an existing transaction cannot change."})

        merged = {field: getattr(current, field) for field in EDITABLE_FIELDS}
        merged.update(patch)
        data = validate_transaction(merged)

        updated = replace(current, **data.model_dump())
        self._items[index] = updated
        self.version += 1
        logger.info("Updated transaction %s", transaction_id)
        return updated

    def remove(self, transaction_id: str) -> Transaction:
        index = self._index_of(transaction_id)
        removed = self._items.pop(index)
        self.version += 1
        logger.info("Removed transaction %s", transaction_id)
        return removed

    # ---- internals ----

    def _index_of(self, transaction_id: str) -> int:
        for index, tx in enumerate(self._items):
            if tx.id == transaction_id:
                return index
        logger.warning("Transaction %s not found", transaction_id)
        raise NotFound(transaction_id)

    def _build_new(self, record: Mapping[str, Any] | TransactionInput) -> Transaction:
        if isinstance(record, TransactionInput):
            return build_transaction(new_transaction_id(), record)

        fields = dict(record)
        transaction_id = fields.pop("id", None)
        data = validate_transaction(fields)

        if transaction_id in (None, ""):
            transaction_id = new_transaction_id()
        transaction_id = str(transaction_id)
        if any(tx.id == transaction_id for tx in self._items):
            raise InvalidInput({"id": f"Transaction id {transaction_id!r} already exists."})

        return build_transaction(transaction_id, data)


# -------------------------------------------------------------------
# Seed data
# -------------------------------------------------------------------

# Demo data for the Expenses screen.
EXPENSES_SEED: Tuple[Dict[str, Any], ...] = (
    {"id": "1", "title": "Salary", "amount": 50000, "category": "Salary", "type": "Income", "date": "2024-01-01"},
    {"id": "2", "title": "Groceries", "amount": 1500, "category": "Food", "type": "Expense", "date": "2024-01-02"},
    {"id": "3", "title": "Petrol", "amount": 800, "category": "Transportation", "type": "Expense", "date": "2024-01-03"},
    {"id": "4", "title": "Restaurant", "amount": 1200, "category": "Food", "type": "Expense", "date": "2024-01-04"},
    {"id": "5", "title": "Freelance", "amount": 8000, "category": "Freelance", "type": "Income", "date": "2024-01-05"},
    {"id": "6", "title": "Rent", "amount": 12000, "category": "Housing", "type": "Expense", "date": "2024-01-06"},
)

# Demo data for the Reports screen, spread over several months and years so
# every period selector has something to show.
REPORTS_SEED: Tuple[Dict[str, Any], ...] = (
    {"id": "1", "title": "Salary", "amount": 50000, "category": "Salary", "type": "Income", "date": "2024-07-01"},
    {"id": "2", "title": "Groceries", "amount": 1500, "category": "Food", "type": "Expense", "date": "2024-07-02"},
    {"id": "3", "title": "Petrol", "amount": 800, "category": "Transportation", "type": "Expense", "date": "2024-06-20"},
    {"id": "4", "title": "Restaurant", "amount": 1200, "category": "Food", "type": "Expense", "date": "2024-06-10"},
    {"id": "5", "title": "Freelance", "amount": 8000, "category": "Freelance", "type": "Income", "date": "2024-05-18"},
    {"id": "6", "title": "Rent", "amount": 12000, "category": "Housing", "type": "Expense", "date": "2023-12-01"},
    {"id": "7", "title": "Utilities", "amount": 2000, "category": "Utilities", "type": "Expense", "date": "2023-12-20"},
    {"id": "8", "title": "Shopping", "amount": 3000, "category": "Shopping", "type": "Expense", "date": "2023-07-22"},
)
