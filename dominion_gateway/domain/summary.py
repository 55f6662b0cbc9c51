"""Input snapshot for the insight summarizer and the local fallback summary"""

from datetime import date
from decimal import Decimal
from dominion_gateway.domain.budgets import person_budgets
from dominion_gateway.domain.cashflow import calculate_cash_flow
from dominion_gateway.domain.models import FinancialSnapshot, LedgerSnapshot, SpendingSummary, Trend
from dominion_gateway.utils.date_utils import month_key

ZERO = Decimal("0")


def build_financial_snapshot(ledger: LedgerSnapshot, today: date) -> FinancialSnapshot:
    """
    Deterministic summary of this month's finances.

    Uses the same cash-flow figures the dashboard reports, so the narrative
    can never disagree with the numbers shown next to it.
    """
    current_month = month_key(today)
    expenses = [e for e in ledger.expenses if month_key(e.date) == current_month]
    incomes = [i for i in ledger.incomes if month_key(i.date) == current_month]
    cash_flow = calculate_cash_flow(ledger.monthly_income, ledger.obligations, expenses, incomes)
    budgets = person_budgets(expenses, ledger.persons)
    global_budget = ledger.monthly_budget if ledger.monthly_budget and ledger.monthly_budget > 0 else None

    return FinancialSnapshot(
        monthly_income=ledger.monthly_income,
        total_extra_income=cash_flow.total_income - ledger.monthly_income,
        total_income=cash_flow.total_income,
        total_obligations=cash_flow.burn_rate + cash_flow.variable_costs,
        total_expenses=cash_flow.total_expenses,
        free_cash_flow=cash_flow.free_cash_flow,
        savings_rate=cash_flow.savings_rate,
        global_budget=global_budget,
        over_global_budget=global_budget is not None and cash_flow.total_expenses > global_budget,
        any_person_over_budget=any(b.over_budget for b in budgets),
        obligations=[o for o in ledger.obligations if o.is_active],
        expenses=expenses,
        incomes=incomes,
        person_budgets=budgets,
        person_names={p.id: p.name for p in ledger.persons},
    )


def welcome_summary() -> SpendingSummary:
    """Shown before the user has entered anything worth analysing"""
    return SpendingSummary(
        summary="Welcome! Add your income and obligations to get personalized insights.",
        highlights=["Set up your monthly income in Settings", "Add your regular obligations"],
        recommendations=["Start by tracking your essential expenses", "Set realistic financial goals"],
        trend=Trend.STABLE,
    )


def fallback_summary(snapshot: FinancialSnapshot) -> SpendingSummary:
    """Local summary from the sign of free cash flow and global budget status only"""
    if snapshot.is_empty:
        return welcome_summary()

    negative_cash_flow = snapshot.free_cash_flow < 0
    over_budget = snapshot.over_global_budget

    if negative_cash_flow:
        summary = "Your expenses exceed your income this month. Immediate action recommended."
    elif over_budget:
        summary = "You have exceeded your monthly budget. Consider reducing discretionary spending."
    else:
        summary = "Your finances appear to be on track this month."

    if negative_cash_flow or over_budget:
        recommendations = [
            "Review non-essential expenses",
            "Consider postponing large purchases",
            "Look for ways to increase income",
        ]
    else:
        recommendations = [
            "Continue tracking expenses",
            "Consider building an emergency fund",
            "Review subscriptions regularly",
        ]

    return SpendingSummary(
        summary=summary,
        highlights=[
            f"Total income: R {snapshot.total_income:,.2f}",
            f"Total obligations: R {snapshot.total_obligations:,.2f}",
            f"Free cash flow: R {snapshot.free_cash_flow:,.2f}",
        ],
        recommendations=recommendations,
        trend=Trend.CONCERNING if negative_cash_flow or over_budget else Trend.STABLE,
    )
