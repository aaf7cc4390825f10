# services/filters.py
#
# Transaction Filters
# Pure helpers that derive the filtered list shown on the Expenses screen.
# Nothing here mutates the collection it is given.

from typing import Iterable, List, Optional

from ..errors import InvalidInput
from ..models import Category, Transaction, TransactionType

# Sentinel filter value meaning "do not filter on this field"
ALL = "all"


def parse_category_filter(value: Optional[str]) -> Optional[Category]:
    """'all' (or empty) -> None, a category name -> Category, anything else -> InvalidInput."""
    if value in (None, "", ALL):
        return None
    try:
        return Category(value)
    except ValueError:
        raise InvalidInput({"category": f"Unknown category {value!r}."}) from None


def parse_type_filter(value: Optional[str]) -> Optional[TransactionType]:
    if value in (None, "", ALL):
        return None
    try:
        return TransactionType(value)
    except ValueError:
        raise InvalidInput({"type": f"Unknown transaction type {value!r}."}) from None


def filter_transactions(
    transactions: Iterable[Transaction],
    category: str = ALL,
    type_: str = ALL,
) -> List[Transaction]:
    """
    Return a new list with the transactions matching both filters, in their
    original order. ALL matches every value.
    """
    wanted_category = parse_category_filter(category)
    wanted_type = parse_type_filter(type_)

    return [
        tx
        for tx in transactions
        if (wanted_category is None or tx.category is wanted_category)
        and (wanted_type is None or tx.type is wanted_type)
    ]
