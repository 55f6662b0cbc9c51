"""Dashboard metrics assembled from a ledger snapshot"""

from datetime import date
from typing import Iterable, List
from dominion_gateway.domain.amortization import payoff_months
from dominion_gateway.domain.budgets import BUDGET_WARNING_PERCENT, budget_alerts
from dominion_gateway.domain.cashflow import burn_rate, calculate_cash_flow, debt_priority, total_debt, variable_costs
from dominion_gateway.domain.exceptions import NonAmortizingPaymentError
from dominion_gateway.domain.models import DashboardMetrics, DebtOverview, DebtPayoff, LedgerSnapshot, Obligation
from dominion_gateway.domain.schedule import discount_status, find_levy_obligation, upcoming_payments
from dominion_gateway.utils.date_utils import month_key


def debt_overview(obligations: Iterable[Obligation]) -> DebtOverview:
    """Avalanche-ordered debts with their payoff horizon"""
    obligations = list(obligations)
    debts: List[DebtPayoff] = []
    for rank, debt in enumerate(debt_priority(obligations), start=1):
        try:
            months = payoff_months(debt.total_balance, debt.amount, debt.interest_rate or 0) or None
        except NonAmortizingPaymentError:
            months = None
        debts.append(DebtPayoff(obligation=debt, rank=rank, payoff_months=months))
    return DebtOverview(total_debt=total_debt(obligations), debts=debts)


def build_dashboard(ledger: LedgerSnapshot, today: date, budget_warning_percent: float = BUDGET_WARNING_PERCENT) -> DashboardMetrics:
    """
    Every rule-based dashboard figure for `today`.

    Expenses and extra income are limited to today's month before they feed
    cash flow and budget checks.
    """
    current_month = month_key(today)
    expenses = [e for e in ledger.expenses if month_key(e.date) == current_month]
    incomes = [i for i in ledger.incomes if month_key(i.date) == current_month]
    levy = find_levy_obligation(ledger.obligations, ledger.levy_obligation_id)

    return DashboardMetrics(
        burn_rate=burn_rate(ledger.obligations),
        variable_costs=variable_costs(ledger.obligations),
        total_debt=total_debt(ledger.obligations),
        cash_flow=calculate_cash_flow(ledger.monthly_income, ledger.obligations, expenses, incomes),
        discount_status=discount_status(levy, ledger.payments, today),
        upcoming_payments=upcoming_payments(ledger.obligations, ledger.payments, ledger.payday, today),
        debt_overview=debt_overview(ledger.obligations),
        budget_alerts=budget_alerts(expenses, ledger.persons, ledger.monthly_budget, budget_warning_percent),
    )
