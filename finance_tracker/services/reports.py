# services/reports.py
#
# Report Aggregation
# Period filtering, income/expense totals and the ranked expense breakdown
# behind the Reports screen. Everything takes `today` explicitly so results
# depend only on the arguments.

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..errors import DivisionUndefined
from ..logging_setup import get_logger
from ..models import Category, Period, Transaction, TransactionType

logger = get_logger(__name__)

TOP_CATEGORY_LIMIT = 5
ZERO = Decimal("0")
HUNDRED = Decimal("100")


# ---- Period filtering ----

def previous_month(today: date) -> Tuple[int, int]:
    """(year, month) of the month before `today`, rolling January back a year."""
    if today.month == 1:
        return today.year - 1, 12
    return today.year, today.month - 1


def period_predicate(period: Period, today: date) -> Callable[[date], bool]:
    """Map a Period to a predicate over transaction dates, evaluated against `today`."""
    period = Period(period)

    if period is Period.CURRENT_MONTH:
        return lambda d: d.year == today.year and d.month == today.month
    if period is Period.LAST_MONTH:
        year, month = previous_month(today)
        return lambda d: d.year == year and d.month == month
    if period is Period.CURRENT_YEAR:
        return lambda d: d.year == today.year
    if period is Period.LAST_YEAR:
        return lambda d: d.year == today.year - 1
    return lambda d: True


def filter_by_period(
    transactions: Iterable[Transaction], period: Period, today: date
) -> List[Transaction]:
    matches = period_predicate(period, today)
    return [tx for tx in transactions if matches(tx.date)]


# ---- Aggregation ----

@dataclass(frozen=True)
class CategoryShare:
    category: Category
    amount: Decimal
    # Share of total expenses, 0..100
    percentage: Decimal


@dataclass(frozen=True)
class Report:
    """Summary of one period: totals, expense breakdown and top categories."""

    period: Period
    transactions: Tuple[Transaction, ...]
    total_income: Decimal
    total_expenses: Decimal
    net_income: Decimal
    category_breakdown: Dict[Category, Decimal] = field(default_factory=dict)
    top_categories: Tuple[CategoryShare, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.transactions


def percentage(amount: Decimal, total: Decimal) -> Decimal:
    if total == 0:
        raise DivisionUndefined(f"Cannot express {amount} as a share of a zero total")
    return amount / total * HUNDRED


def category_breakdown(transactions: Iterable[Transaction]) -> Dict[Category, Decimal]:
    """Expense totals per category, keyed in order of first appearance."""
    breakdown: Dict[Category, Decimal] = {}
    for tx in transactions:
        if tx.type is TransactionType.EXPENSE:
            breakdown[tx.category] = breakdown.get(tx.category, ZERO) + tx.amount
    return breakdown


def top_categories(
    breakdown: Dict[Category, Decimal],
    total_expenses: Decimal,
    limit: int = TOP_CATEGORY_LIMIT,
) -> Tuple[CategoryShare, ...]:
    """
    Rank breakdown entries by amount, highest first, keeping at most `limit`.

    sorted() is stable, so equal amounts keep their breakdown order.
    When total_expenses is zero every share is reported as 0%.
    """
    ranked = sorted(breakdown.items(), key=lambda item: item[1], reverse=True)[:limit]

    shares: List[CategoryShare] = []
    for category, amount in ranked:
        try:
            share = percentage(amount, total_expenses)
        except DivisionUndefined:
            logger.debug("Total expenses are zero; reporting %s as 0%%", category.value)
            share = ZERO
        shares.append(CategoryShare(category=category, amount=amount, percentage=share))
    return tuple(shares)


def summarize(transactions: Iterable[Transaction], period: Period = Period.ALL_TIME) -> Report:
    """Aggregate an already period-filtered sequence into a Report."""
    transactions = tuple(transactions)

    total_income = sum((tx.amount for tx in transactions if tx.type is TransactionType.INCOME), ZERO)
    total_expenses = sum((tx.amount for tx in transactions if tx.type is TransactionType.EXPENSE), ZERO)
    breakdown = category_breakdown(transactions)

    return Report(
        period=Period(period),
        transactions=transactions,
        total_income=total_income,
        total_expenses=total_expenses,
        net_income=total_income - total_expenses,
        category_breakdown=breakdown,
        top_categories=top_categories(breakdown, total_expenses),
    )


def build_report(transactions: Iterable[Transaction], period: Period, today: date) -> Report:
    """Filter the full collection to `period` (relative to `today`) and summarize it."""
    return summarize(filter_by_period(transactions, period, today), period)


# ---- Cache ----

class ReportCache:
    """
    Keeps the last computed report until the store changes, the period
    changes, or the day rolls over.

    `store` is anything exposing `version` and `all()`, e.g. TransactionStore.
    """

    def __init__(self):
        self._key: Optional[Tuple[int, Period, date]] = None
        self._report: Optional[Report] = None

    def get(self, store, period: Period, today: date) -> Report:
        key = (store.version, Period(period), today)
        if self._report is not None and key == self._key:
            logger.debug("Report cache hit for %s", key[1].value)
            return self._report

        self._report = build_report(store.all(), key[1], today)
        self._key = key
        logger.debug("Report recomputed for %s (store version %d)", key[1].value, key[0])
        return self._report
