# errors.py
# Role: Exception types shared by the store, the filters and the report aggregator.
#       Routes catch these and turn them into notices; none of them is fatal.

from typing import Dict


class TrackerError(Exception):
    """Base class for all finance tracker errors."""


class NotFound(TrackerError):
    """
    Raised when update/remove/get references an id that is not in the store.
    """

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction {transaction_id!r} not found")


class InvalidInput(TrackerError):
    """
    Raised before any mutation when a submission fails validation.

    `errors` maps a field name (title, amount, category, type, date, ...)
    to a human readable message, so forms can show them next to the field.
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        detail = "; ".join(f"{field}: {msg}" for field, msg in self.errors.items())
        super().__init__(f"Invalid input ({detail})")


class DivisionUndefined(TrackerError):
    """Raised when a percentage is requested against a zero total."""
