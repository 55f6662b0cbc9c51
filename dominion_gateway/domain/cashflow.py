"""Obligation classification, burn rate, debt ordering and free cash flow"""

from decimal import Decimal
from typing import Iterable, List
from dominion_gateway.domain.models import CashFlow, Expense, Income, Obligation

ZERO = Decimal("0")


def burn_rate(obligations: Iterable[Obligation]) -> Decimal:
    """Total of active fixed (uncompromised) obligations"""
    return sum((o.amount for o in obligations if o.is_uncompromised and o.is_active), ZERO)


def variable_costs(obligations: Iterable[Obligation]) -> Decimal:
    """Total of active discretionary obligations"""
    return sum((o.amount for o in obligations if not o.is_uncompromised and o.is_active), ZERO)


def total_debt(obligations: Iterable[Obligation]) -> Decimal:
    """Outstanding principal across active debt instruments"""
    return sum((o.total_balance or ZERO for o in obligations if o.is_debt and o.is_active), ZERO)


def debt_priority(obligations: Iterable[Obligation]) -> List[Obligation]:
    """
    Active debts with a positive balance, most expensive first (avalanche).

    sorted() is stable, so debts sharing an interest rate keep their input order.
    """
    debts = [o for o in obligations if o.is_active and o.total_balance is not None and o.total_balance > 0]
    return sorted(debts, key=lambda o: o.interest_rate or ZERO, reverse=True)


def savings_rate(free_cash_flow: Decimal, total_income: Decimal) -> float:
    """Free cash flow as a percentage of income; 0 when there is no income"""
    if not total_income:
        return 0.0
    return float(free_cash_flow / total_income * 100)


def calculate_cash_flow(
    monthly_income: Decimal,
    obligations: List[Obligation],
    expenses: List[Expense],
    incomes: List[Income],
) -> CashFlow:
    """
    Free cash flow for one cycle.

    free_cash_flow = (salary + extra income) - burn rate - variable costs - expenses
    """
    total_income = monthly_income + sum((i.amount for i in incomes), ZERO)
    fixed = burn_rate(obligations)
    variable = variable_costs(obligations)
    spent = sum((e.amount for e in expenses), ZERO)
    free = total_income - fixed - variable - spent

    return CashFlow(
        total_income=total_income,
        burn_rate=fixed,
        variable_costs=variable,
        total_expenses=spent,
        free_cash_flow=free,
        savings_rate=savings_rate(free, total_income),
    )
