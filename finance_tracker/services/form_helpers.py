# services/form_helpers.py
#
# Form Helper Functions
# Converts between transaction records and the string values of the
# add/edit form, and builds Expenses screen URLs that keep the active filters.

from datetime import date
from typing import Dict, Iterable, Optional
from urllib.parse import urlencode

from ..models import Category, Transaction, TransactionType
from .filters import ALL
from .formatting import format_amount

# Advisory messages shown after a redirect, keyed by the `notice` query param.
NOTICES: Dict[str, str] = {
    "added": "Transaction added successfully!",
    "updated": "Transaction updated successfully!",
    "deleted": "Transaction deleted successfully!",
}


# ---- Form values ----

def empty_form(today: date) -> Dict[str, str]:
    """Defaults for a new transaction: type Expense, dated today."""
    return {
        "title": "",
        "amount": "",
        "category": "",
        "type": TransactionType.EXPENSE.value,
        "date": today.isoformat(),
    }


def form_from_transaction(tx: Transaction) -> Dict[str, str]:
    """Pre-fill values for editing an existing transaction."""
    return {
        "title": tx.title,
        "amount": format_amount(tx.amount),
        "category": tx.category.value,
        "type": tx.type.value,
        "date": tx.date.isoformat(),
    }


# ---- Filters ----

def normalize_filter(value: Optional[str], allowed: Iterable[str]) -> str:
    """Keep a filter value only when it is one of `allowed`; otherwise ALL."""
    if value and value in set(allowed):
        return value
    return ALL


def normalize_category_filter(value: Optional[str]) -> str:
    return normalize_filter(value, (c.value for c in Category))


def normalize_type_filter(value: Optional[str]) -> str:
    return normalize_filter(value, (t.value for t in TransactionType))


def build_expenses_url(category: str = ALL, type_: str = ALL, notice: Optional[str] = None) -> str:
    """
    /expenses URL carrying the non-default filters and an optional notice key.
    """
    items = []
    if category != ALL:
        items.append(("category", category))
    if type_ != ALL:
        items.append(("type", type_))
    if notice:
        items.append(("notice", notice))

    if not items:
        return "/expenses"
    return "/expenses?" + urlencode(items)
