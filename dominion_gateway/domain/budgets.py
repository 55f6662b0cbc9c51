"""Household budget tracking: global monthly budget and per-person limits"""

from decimal import Decimal
from typing import Iterable, List, Optional
from dominion_gateway.domain.models import BudgetAlert, BudgetAlertLevel, Expense, Person, PersonBudget

ZERO = Decimal("0")

# Spend at or above this share of a budget raises a warning (percent)
BUDGET_WARNING_PERCENT = 80.0
BUDGET_EXCEEDED_PERCENT = 100.0


def spent_by_person(expenses: Iterable[Expense], person_id: str) -> Decimal:
    return sum((e.amount for e in expenses if e.person_id == person_id), ZERO)


def _alert(name: str, spent: Decimal, budget: Optional[Decimal], warning_percent: float) -> Optional[BudgetAlert]:
    if not budget or budget <= 0:
        return None
    percentage = float(spent / budget * 100)
    if percentage < warning_percent:
        return None
    level = BudgetAlertLevel.EXCEEDED if percentage >= BUDGET_EXCEEDED_PERCENT else BudgetAlertLevel.WARNING
    return BudgetAlert(name=name, spent=spent, budget=budget, percentage=percentage, level=level)


def budget_alerts(
    expenses: List[Expense],
    persons: Iterable[Person],
    monthly_budget: Optional[Decimal],
    warning_percent: float = BUDGET_WARNING_PERCENT,
) -> List[BudgetAlert]:
    """
    Alerts for budgets that are nearly or fully used this month.

    `expenses` should already be limited to the month being checked.
    The global budget comes first, then people in input order.
    """
    alerts = []
    total = sum((e.amount for e in expenses), ZERO)
    alert = _alert("Global Budget", total, monthly_budget, warning_percent)
    if alert:
        alerts.append(alert)

    for person in persons:
        alert = _alert(person.name, spent_by_person(expenses, person.id), person.budget_limit, warning_percent)
        if alert:
            alerts.append(alert)
    return alerts


def person_budgets(expenses: List[Expense], persons: Iterable[Person]) -> List[PersonBudget]:
    """Spend against each person's limit; people without a limit are listed with None"""
    result = []
    for person in persons:
        spent = spent_by_person(expenses, person.id)
        limit = person.budget_limit if person.budget_limit and person.budget_limit > 0 else None
        result.append(
            PersonBudget(
                name=person.name,
                budget_limit=limit,
                spent=spent,
                over_budget=limit is not None and spent > limit,
                percent_used=round(float(spent / limit * 100)) if limit is not None else None,
            )
        )
    return result
