"""Rule-based spending insights derived from monthly analytics"""

from typing import List, TYPE_CHECKING
from dominion_gateway.domain.models import Insight, InsightType

if TYPE_CHECKING:
    from dominion_gateway.domain.models import SpendingAnalytics

# Overall month-over-month movement worth calling out (percent)
OVERALL_CHANGE_THRESHOLD = 10.0

# Per-category month-over-month movement worth calling out (percent)
CATEGORY_CHANGE_THRESHOLD = 20.0

# A single category taking at least this share of the month is flagged
CATEGORY_SHARE_WARNING = 50.0

MAX_INSIGHTS = 5


def _label(category: str) -> str:
    return category.capitalize()


def generate_insights(analytics: "SpendingAnalytics") -> List[Insight]:
    """
    Ordered insights for the target month.

    Order: history notice, overall trend, dominant-category warning, biggest
    category, then per-category swings. Capped at MAX_INSIGHTS.
    """
    insights: List[Insight] = []
    current = analytics.current_month
    previous = analytics.previous_month

    if not analytics.has_previous_month:
        if current.total > 0:
            message = "No spending recorded last month yet, so trends will appear as your history builds up"
        else:
            message = "No spending recorded yet. Insights will appear as you add expenses"
        insights.append(Insight(type=InsightType.INFO, message=message))
    else:
        change = analytics.month_over_month_change
        if change > OVERALL_CHANGE_THRESHOLD:
            insights.append(
                Insight(
                    type=InsightType.INCREASE,
                    message=f"Your spending is up {change:.0f}% compared to last month",
                    change=change,
                )
            )
        elif change < -OVERALL_CHANGE_THRESHOLD:
            insights.append(
                Insight(
                    type=InsightType.DECREASE,
                    message=f"Your spending is down {abs(change):.0f}% compared to last month",
                    change=change,
                )
            )

    if analytics.top_categories:
        top = analytics.top_categories[0]
        if top.percentage >= CATEGORY_SHARE_WARNING and len(analytics.top_categories) > 1:
            insights.append(
                Insight(
                    type=InsightType.WARNING,
                    message=f"{_label(top.category)} makes up {top.percentage:.0f}% of your spending this month",
                    category=top.category,
                )
            )
        insights.append(
            Insight(
                type=InsightType.INFO,
                message=f"{_label(top.category)} is your biggest expense ({top.percentage:.0f}% of spending)",
                category=top.category,
            )
        )

    for category, amount in current.category_breakdown.items():
        previous_amount = previous.category_breakdown.get(category)
        if not previous_amount or previous_amount <= 0:
            continue
        change = float((amount - previous_amount) / previous_amount * 100)
        if change > CATEGORY_CHANGE_THRESHOLD:
            insights.append(
                Insight(
                    type=InsightType.INCREASE,
                    message=f"You spent {change:.0f}% more on {_label(category)} this month",
                    category=category,
                    change=change,
                )
            )
        elif change < -CATEGORY_CHANGE_THRESHOLD:
            insights.append(
                Insight(
                    type=InsightType.DECREASE,
                    message=f"You saved {abs(change):.0f}% on {_label(category)} this month",
                    category=category,
                    change=change,
                )
            )

    return insights[:MAX_INSIGHTS]
