"""Monthly spending aggregation: totals, category breakdowns and month-over-month change"""

from collections import defaultdict
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Union
from dominion_gateway.domain.insights import generate_insights
from dominion_gateway.domain.models import (
    CategoryShare,
    Expense,
    MonthlyTotal,
    MonthSummary,
    SpendingAnalytics,
)
from dominion_gateway.utils.date_utils import (
    add_months,
    days_in_month,
    month_key,
    month_label,
    month_range,
    parse_month_key,
)

ZERO = Decimal("0")
CENT = Decimal("0.01")

DEFAULT_LOOKBACK_MONTHS = 6


def group_by_month(expenses: Iterable[Expense]) -> Dict[str, List[Expense]]:
    """Expenses keyed by YYYY-MM, input order preserved inside each month"""
    grouped: Dict[str, List[Expense]] = defaultdict(list)
    for expense in expenses:
        grouped[month_key(expense.date)].append(expense)
    return grouped


def category_breakdown(expenses: Iterable[Expense]) -> Dict[str, Decimal]:
    """Summed amount per category, in first-seen order"""
    breakdown: Dict[str, Decimal] = {}
    for expense in expenses:
        category = expense.category.value
        breakdown[category] = breakdown.get(category, ZERO) + expense.amount
    return breakdown


def summarize_month(expenses: List[Expense]) -> MonthSummary:
    return MonthSummary(
        total=sum((e.amount for e in expenses), ZERO),
        category_breakdown=category_breakdown(expenses),
        transaction_count=len(expenses),
    )


def percent_change(current: Decimal, previous: Decimal) -> float:
    """Relative change in percent; 0 when there is nothing to compare against"""
    if previous <= 0:
        return 0.0
    return float((current - previous) / previous * 100)


def elapsed_days(target: date, today: date) -> int:
    """Days of spending covered by the target month as of today"""
    if (target.year, target.month) == (today.year, today.month):
        return today.day
    return days_in_month(target.year, target.month)


def rank_categories(breakdown: Dict[str, Decimal], total: Decimal) -> List[CategoryShare]:
    """All categories by amount, largest first, each with its share of the total"""
    ranked = sorted(breakdown.items(), key=lambda item: item[1], reverse=True)
    return [
        CategoryShare(
            category=category,
            amount=amount,
            percentage=float(amount / total * 100) if total > 0 else 0.0,
        )
        for category, amount in ranked
    ]


def build_spending_analytics(
    expenses: Iterable[Expense],
    today: date,
    target_month: Optional[Union[str, date]] = None,
    lookback_months: int = DEFAULT_LOOKBACK_MONTHS,
) -> SpendingAnalytics:
    """
    Spending analytics for the target month (default: today's month).

    Compares the target month with the month before it, builds a per-month
    history of `lookback_months` months ending at the target (oldest first) and
    runs the rule-based insight generator over the result.

    Raises:
        InvalidMonthKeyError: target_month string is not YYYY-MM
    """
    if target_month is None:
        target = today.replace(day=1)
    elif isinstance(target_month, str):
        target = parse_month_key(target_month)
    else:
        target = target_month.replace(day=1)

    by_month = group_by_month(expenses)
    current = summarize_month(by_month.get(month_key(target), []))
    previous = summarize_month(by_month.get(month_key(add_months(target, -1)), []))

    monthly_data = []
    for month_start in month_range(target, max(lookback_months, 1)):
        summary = summarize_month(by_month.get(month_key(month_start), []))
        monthly_data.append(
            MonthlyTotal(
                month=month_key(month_start),
                label=month_label(month_start),
                total=summary.total,
                category_breakdown=summary.category_breakdown,
            )
        )

    days = elapsed_days(target, today)
    avg_daily = (current.total / days).quantize(CENT, rounding=ROUND_HALF_UP) if days > 0 else ZERO

    analytics = SpendingAnalytics(
        target_month=month_key(target),
        current_month=current,
        previous_month=previous,
        month_over_month_change=percent_change(current.total, previous.total),
        has_previous_month=previous.total > 0,
        monthly_data=monthly_data,
        insights=[],
        avg_daily_spending=avg_daily,
        top_categories=rank_categories(current.category_breakdown, current.total),
    )
    analytics.insights = generate_insights(analytics)
    return analytics
