# models.py
# Role: Domain types for the finance tracker.
#       Defines the shared Category / TransactionType / Period enumerations,
#       the immutable Transaction record held by the store, and the validated
#       TransactionInput shape that every user submission goes through.

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidInput


class Category(str, Enum):
    """
    Closed set of transaction categories.

    The same enum feeds form validation, the filter dropdown and the
    report breakdown, so none of them can drift from the others.
    """

    FOOD = "Food"
    TRANSPORTATION = "Transportation"
    HOUSING = "Housing"
    ENTERTAINMENT = "Entertainment"
    HEALTH = "Health"
    SHOPPING = "Shopping"
    UTILITIES = "Utilities"
    SALARY = "Salary"
    FREELANCE = "Freelance"
    INVESTMENT = "Investment"


class TransactionType(str, Enum):
    INCOME = "Income"
    EXPENSE = "Expense"


class Period(str, Enum):
    """Calendar-relative reporting windows offered on the Reports screen."""

    CURRENT_MONTH = "current-month"
    LAST_MONTH = "last-month"
    CURRENT_YEAR = "current-year"
    LAST_YEAR = "last-year"
    ALL_TIME = "all-time"

    @property
    def label(self) -> str:
        # "current-month" -> "Current Month"
        return self.value.replace("-", " ").title()


# -------------------------------------------------------------------
# Records
# -------------------------------------------------------------------

@dataclass(frozen=True)
class Transaction:
    """
    A single income or expense record.

    Instances are immutable: editing a transaction replaces the list element
    in the store with a new instance carrying the same id.
    """

    id: str
    title: str
    amount: Decimal
    category: Category
    type: TransactionType
    date: dt.date

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME


# Largest amount the screens can format: 13 whole digits plus cents.
MAX_AMOUNT_DIGITS = 15
ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")

# Messages shown next to form fields when validation fails.
FIELD_MESSAGES: Dict[str, str] = {
    "title": "Title is required.",
    "amount": "Amount must be a non-negative number. At most 13 whole digits and 2 decimals.",
    "category": "Select one of the listed categories.",
    "type": "Type must be Income or Expense.",
    "date": "Date must be a valid calendar date (YYYY-MM-DD).",
}


class TransactionInput(BaseModel):
    """
    Validated user submission: every Transaction field except ``id``.

    Raw form strings are coerced here (amount -> Decimal, date -> date,
    category/type -> enum members).
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    title: str = Field(min_length=1)
    amount: Decimal = Field(ge=0, max_digits=MAX_AMOUNT_DIGITS, decimal_places=2, allow_inf_nan=False)
    category: Category
    type: TransactionType
    date: dt.date

    @field_validator("date", mode="before")
    @classmethod
    def _iso_date_only(cls, value: Any) -> Any:
        # Only YYYY-MM-DD strings or date objects; no timestamps or compact forms.
        if isinstance(value, dt.datetime):
            raise ValueError("date must not carry a time")
        if isinstance(value, dt.date):
            return value
        if isinstance(value, str) and ISO_DATE_RE.fullmatch(value.strip()):
            return dt.date.fromisoformat(value.strip())
        raise ValueError("date must be YYYY-MM-DD")


def validate_transaction(data: Mapping[str, Any]) -> TransactionInput:
    """
    Validate a mapping of raw field values.

    Raises InvalidInput with one message per offending field; the first
    pydantic error for a field wins.
    """
    try:
        return TransactionInput.model_validate(dict(data))
    except ValidationError as exc:
        errors: Dict[str, str] = {}
        for err in exc.errors():
            field = str(err["loc"][0]) if err["loc"] else "record"
            if err["type"] == "extra_forbidden":
                message = f"Unknown field {field!r}."
            else:
                message = FIELD_MESSAGES.get(field, err["msg"])
            errors.setdefault(field, message)
        raise InvalidInput(errors) from exc


def build_transaction(transaction_id: str, data: TransactionInput) -> Transaction:
    return Transaction(
        id=transaction_id,
        title=data.title,
        amount=data.amount,
        category=data.category,
        type=data.type,
        date=data.date,
    )
