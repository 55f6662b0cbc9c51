"""Unit tests for monthly spending aggregation"""

import pytest
from datetime import date
from decimal import Decimal
from dominion_gateway.domain.analytics import build_spending_analytics, percent_change
from dominion_gateway.domain.exceptions import InvalidMonthKeyError
from dominion_gateway.domain.models import Category, Expense, InsightType


def spend(amount, category, day) -> Expense:
    return Expense(amount=Decimal(amount), category=category, date=day)


@pytest.fixture
def expenses() -> list[Expense]:
    return [
        spend("600", Category.GROCERIES, date(2026, 10, 3)),
        spend("300", Category.DINING, date(2026, 10, 5)),
        spend("100", Category.DINING, date(2026, 10, 12)),
        spend("500", Category.GROCERIES, date(2026, 9, 4)),
        spend("300", Category.DINING, date(2026, 9, 18)),
        spend("200", Category.TRANSPORT, date(2026, 8, 30)),
        spend("999", Category.SHOPPING, date(2026, 11, 2)),  # After target month
        spend("450", Category.SHOPPING, date(2026, 3, 1)),  # Before lookback window
    ]


def test_current_and_previous_month(expenses, today):
    analytics = build_spending_analytics(expenses, today=today, target_month="2026-10")

    assert analytics.target_month == "2026-10"
    assert analytics.current_month.total == Decimal("1000")
    assert analytics.current_month.transaction_count == 3
    assert analytics.current_month.category_breakdown == {"GROCERIES": Decimal("600"), "DINING": Decimal("400")}
    assert analytics.previous_month.total == Decimal("800")
    assert analytics.previous_month.transaction_count == 2
    assert analytics.month_over_month_change == 25.0
    assert analytics.has_previous_month is True


def test_monthly_history_oldest_first(expenses, today):
    analytics = build_spending_analytics(expenses, today=today, target_month="2026-10", lookback_months=6)

    assert [m.month for m in analytics.monthly_data] == [
        "2026-05", "2026-06", "2026-07", "2026-08", "2026-09", "2026-10",
    ]
    assert analytics.monthly_data[0].label == "May 2026"
    assert [m.total for m in analytics.monthly_data] == [0, 0, 0, 200, 800, 1000]
    assert analytics.monthly_data[3].category_breakdown == {"TRANSPORT": Decimal("200")}


def test_lookback_of_one_month(expenses, today):
    analytics = build_spending_analytics(expenses, today=today, target_month="2026-10", lookback_months=1)
    assert [m.month for m in analytics.monthly_data] == ["2026-10"]


def test_average_daily_spend_uses_elapsed_days_for_current_month(expenses, today):
    analytics = build_spending_analytics(expenses, today=today)

    # 1000 over 18 elapsed days
    assert analytics.target_month == "2026-10"
    assert analytics.avg_daily_spending == Decimal("55.56")


def test_average_daily_spend_uses_full_length_for_past_month(expenses, today):
    analytics = build_spending_analytics(expenses, today=today, target_month="2026-09")

    assert analytics.avg_daily_spending == Decimal("26.67")  # 800 / 30
    assert analytics.month_over_month_change == 300.0


def test_top_categories_ranked_with_share(expenses, today):
    analytics = build_spending_analytics(expenses, today=today, target_month="2026-10")

    assert [(c.category, c.amount, c.percentage) for c in analytics.top_categories] == [
        ("GROCERIES", Decimal("600"), 60.0),
        ("DINING", Decimal("400"), 40.0),
    ]


def test_no_previous_month_is_not_infinite(today):
    analytics = build_spending_analytics(
        [spend("500", Category.DINING, date(2026, 10, 1))],
        today=today,
        target_month="2026-10",
    )

    assert analytics.month_over_month_change == 0.0
    assert analytics.has_previous_month is False
    assert analytics.insights[0].type == InsightType.INFO


def test_percent_change_without_baseline():
    assert percent_change(Decimal("500"), Decimal("0")) == 0.0
    assert percent_change(Decimal("50"), Decimal("100")) == -50.0


def test_empty_history_is_a_zero_state(today):
    analytics = build_spending_analytics([], today=today)

    assert analytics.current_month.total == 0
    assert analytics.current_month.category_breakdown == {}
    assert analytics.top_categories == []
    assert analytics.avg_daily_spending == 0
    assert len(analytics.monthly_data) == 6
    assert [i.type for i in analytics.insights] == [InsightType.INFO]


def test_target_month_accepts_dates(expenses, today):
    by_key = build_spending_analytics(expenses, today=today, target_month="2026-09")
    by_date = build_spending_analytics(expenses, today=today, target_month=date(2026, 9, 15))
    assert by_key == by_date


def test_invalid_target_month(expenses, today):
    with pytest.raises(InvalidMonthKeyError):
        build_spending_analytics(expenses, today=today, target_month="2026-13")


def test_same_snapshot_gives_identical_output(expenses, today):
    first = build_spending_analytics(expenses, today=today, target_month="2026-10")
    second = build_spending_analytics(list(expenses), today=today, target_month="2026-10")

    assert first == second
    assert repr(first) == repr(second)
