from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.errors import DivisionUndefined
from finance_tracker.models import Category, Period
from finance_tracker.services.reports import (
    ReportCache,
    build_report,
    filter_by_period,
    percentage,
    previous_month,
    summarize,
)
from finance_tracker.store import REPORTS_SEED, TransactionStore

from tests.helpers import TODAY, make_tx, record


def rounded(value: Decimal) -> Decimal:
    return value.quantize(Decimal("0.1"))


def test_worked_example_all_time():
    seed = [
        make_tx("1", 50000, "Income", "Salary", "2024-01-01"),
        make_tx("2", 1500, "Expense", "Food", "2024-01-02"),
        make_tx("3", 800, "Expense", "Transportation", "2024-01-03"),
    ]

    report = build_report(seed, Period.ALL_TIME, TODAY)

    assert report.total_income == 50000
    assert report.total_expenses == 2300
    assert report.net_income == 47700
    assert [(s.category, s.amount, rounded(s.percentage)) for s in report.top_categories] == [
        (Category.FOOD, Decimal("1500"), Decimal("65.2")),
        (Category.TRANSPORTATION, Decimal("800"), Decimal("34.8")),
    ]


def test_income_categories_are_excluded_from_breakdown():
    report = summarize([make_tx("1", 100, "Income", "Salary"), make_tx("2", 40, "Expense", "Health")])
    assert report.category_breakdown == {Category.HEALTH: Decimal("40")}


def test_net_income_can_be_negative_and_always_balances():
    report = summarize([make_tx("1", 100, "Income", "Freelance"), make_tx("2", 250, "Expense", "Housing")])
    assert report.net_income == Decimal("-150")
    assert report.total_income - report.total_expenses == report.net_income


def test_top_categories_capped_at_five_and_sorted():
    txs = [
        make_tx("1", 10, category="Food"),
        make_tx("2", 70, category="Transportation"),
        make_tx("3", 30, category="Housing"),
        make_tx("4", 60, category="Entertainment"),
        make_tx("5", 20, category="Health"),
        make_tx("6", 50, category="Shopping"),
        make_tx("7", 40, category="Utilities"),
    ]

    top = summarize(txs).top_categories

    assert len(top) == 5
    amounts = [s.amount for s in top]
    assert amounts == sorted(amounts, reverse=True)
    assert [s.category for s in top] == [
        Category.TRANSPORTATION,
        Category.ENTERTAINMENT,
        Category.SHOPPING,
        Category.UTILITIES,
        Category.HOUSING,
    ]


def test_equal_amounts_keep_first_appearance_order():
    txs = [
        make_tx("1", 100, category="Health"),
        make_tx("2", 100, category="Food"),
        make_tx("3", 50, category="Health"),
        make_tx("4", 50, category="Food"),
        make_tx("5", 150, category="Utilities"),
    ]
    top = summarize(txs).top_categories
    assert [s.category for s in top] == [Category.HEALTH, Category.FOOD, Category.UTILITIES]


def test_zero_total_expenses_reports_zero_percent():
    report = summarize([make_tx("1", 0, category="Food"), make_tx("2", 500, "Income", "Salary")])
    assert report.total_expenses == 0
    assert [(s.category, s.percentage) for s in report.top_categories] == [(Category.FOOD, Decimal("0"))]


def test_percentage_raises_on_zero_total():
    with pytest.raises(DivisionUndefined):
        percentage(Decimal("1"), Decimal("0"))


def test_empty_period_gives_zero_report():
    report = summarize([])
    assert report.is_empty
    assert report.total_income == report.total_expenses == report.net_income == 0
    assert report.top_categories == ()


@pytest.mark.parametrize(
    "today, expected",
    [(date(2024, 2, 15), (2024, 1)), (date(2024, 1, 31), (2023, 12)), (date(2024, 12, 1), (2024, 11))],
)
def test_previous_month(today, expected):
    assert previous_month(today) == expected


def test_last_month_selects_january_when_today_is_february():
    txs = [
        make_tx("a", 1, when="2023-12-31"),
        make_tx("b", 1, when="2024-01-01"),
        make_tx("c", 1, when="2024-01-31"),
        make_tx("d", 1, when="2024-02-01"),
        make_tx("e", 1, when="2023-01-15"),
    ]
    assert [tx.id for tx in filter_by_period(txs, Period.LAST_MONTH, date(2024, 2, 15))] == ["b", "c"]


def test_last_month_rolls_back_year_in_january():
    txs = [make_tx("a", 1, when="2023-12-05"), make_tx("b", 1, when="2024-12-05")]
    assert [tx.id for tx in filter_by_period(txs, Period.LAST_MONTH, date(2024, 1, 10))] == ["a"]


@pytest.mark.parametrize(
    "period, expected_ids",
    [
        (Period.CURRENT_MONTH, ["1", "2"]),
        (Period.LAST_MONTH, ["3", "4"]),
        (Period.CURRENT_YEAR, ["1", "2", "3", "4", "5"]),
        (Period.LAST_YEAR, ["6", "7", "8"]),
        (Period.ALL_TIME, ["1", "2", "3", "4", "5", "6", "7", "8"]),
    ],
)
def test_period_filters_over_reports_seed(period, expected_ids):
    store = TransactionStore(REPORTS_SEED)
    assert [tx.id for tx in filter_by_period(store.all(), period, TODAY)] == expected_ids


def test_last_year_report_over_seed():
    report = build_report(TransactionStore(REPORTS_SEED).all(), Period.LAST_YEAR, TODAY)
    assert report.total_income == 0
    assert report.total_expenses == 17000
    assert [s.category for s in report.top_categories] == [Category.HOUSING, Category.SHOPPING, Category.UTILITIES]


def test_cache_reuses_report_until_something_changes():
    store = TransactionStore(REPORTS_SEED)
    cache = ReportCache()

    first = cache.get(store, Period.CURRENT_MONTH, TODAY)
    assert cache.get(store, Period.CURRENT_MONTH, TODAY) is first

    other_period = cache.get(store, Period.ALL_TIME, TODAY)
    assert other_period is not first
    assert other_period.period is Period.ALL_TIME

    store.add(record(amount="500", when="2024-07-03"))
    refreshed = cache.get(store, Period.ALL_TIME, TODAY)
    assert refreshed is not other_period
    assert refreshed.total_expenses == other_period.total_expenses + 500

    next_day = cache.get(store, Period.ALL_TIME, date(2024, 7, 16))
    assert next_day is not refreshed
