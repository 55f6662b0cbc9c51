"""Domain models - pure Python dataclasses representing ledger entries and derived state"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional


class Category(str, Enum):
    """Spending / obligation category tag"""

    HOUSING = "HOUSING"
    DEBT = "DEBT"
    LIVING = "LIVING"
    SAVINGS = "SAVINGS"
    INSURANCE = "INSURANCE"
    UTILITIES = "UTILITIES"
    TRANSPORT = "TRANSPORT"
    GROCERIES = "GROCERIES"
    DINING = "DINING"
    ENTERTAINMENT = "ENTERTAINMENT"
    SHOPPING = "SHOPPING"
    OTHER = "OTHER"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class IncomeSource(str, Enum):
    SALARY = "SALARY"
    FREELANCE = "FREELANCE"
    SIDE_HUSTLE = "SIDE_HUSTLE"
    SALE = "SALE"
    RENTAL = "RENTAL"
    GIFT = "GIFT"
    INVESTMENT = "INVESTMENT"
    REFUND = "REFUND"
    OTHER = "OTHER"


class AdjustmentReason(str, Enum):
    DISCOUNT = "DISCOUNT"
    INCREASE = "INCREASE"
    DECREASE = "DECREASE"
    PARTIAL = "PARTIAL"
    ERROR = "ERROR"


class InsightType(str, Enum):
    """Closed set of rule-based insight kinds"""

    INCREASE = "increase"
    DECREASE = "decrease"
    INFO = "info"
    WARNING = "warning"


class Trend(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    CONCERNING = "concerning"


class BudgetAlertLevel(str, Enum):
    WARNING = "warning"
    EXCEEDED = "exceeded"


# --- Ledger entries ---------------------------------------------------------


@dataclass
class Obligation:
    """Recurring bill or debt. With total_balance set, amount is the monthly repayment."""

    id: str
    name: str
    amount: Decimal
    is_uncompromised: bool
    is_active: bool
    debit_order_date: int
    category: Category = Category.OTHER
    provider: str = ""
    interest_rate: Optional[Decimal] = None  # Annual percentage
    total_balance: Optional[Decimal] = None
    person_id: Optional[str] = None

    @property
    def is_debt(self) -> bool:
        return self.total_balance is not None


@dataclass
class Payment:
    """Settlement of an obligation for one billing month (YYYY-MM)"""

    obligation_id: str
    amount: Decimal
    paid_at: datetime
    month: str
    expected_amount: Optional[Decimal] = None
    adjustment_reason: Optional[AdjustmentReason] = None


@dataclass
class Expense:
    amount: Decimal
    category: Category
    date: date
    name: str = ""
    person_id: Optional[str] = None


@dataclass
class Income:
    """Non-salary inflow"""

    amount: Decimal
    source: IncomeSource
    date: date
    is_recurring: bool = False
    name: str = ""


@dataclass
class Person:
    """Household member with an optional monthly budget"""

    id: str
    name: str
    budget_limit: Optional[Decimal] = None


@dataclass
class LedgerSnapshot:
    """Everything the engine needs for one user, captured at request time"""

    monthly_income: Decimal = Decimal("0")
    payday: int = 25
    monthly_budget: Optional[Decimal] = None
    levy_obligation_id: Optional[str] = None
    obligations: List[Obligation] = field(default_factory=list)
    payments: List[Payment] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)
    incomes: List[Income] = field(default_factory=list)
    persons: List[Person] = field(default_factory=list)


# --- Derived state ----------------------------------------------------------


@dataclass
class DiscountStatus:
    is_secured: bool
    levy_amount: Decimal
    due_date: date
    days_remaining: int
    paid_date: Optional[datetime] = None


@dataclass
class UpcomingPayment:
    obligation: Obligation
    due_date: date
    days_until: int
    is_paid: bool


@dataclass
class CashFlow:
    total_income: Decimal
    burn_rate: Decimal
    variable_costs: Decimal
    total_expenses: Decimal
    free_cash_flow: Decimal
    savings_rate: float

    @property
    def is_surplus(self) -> bool:
        return self.free_cash_flow >= 0


@dataclass
class PayoffRow:
    """One month of an amortization schedule"""

    month: int
    payment: Decimal
    interest: Decimal
    principal: Decimal
    remaining_balance: Decimal


@dataclass
class DebtPayoff:
    obligation: Obligation
    rank: int
    payoff_months: Optional[int]  # None when not computable (zero payment or never amortizes)


@dataclass
class DebtOverview:
    total_debt: Decimal
    debts: List[DebtPayoff]


@dataclass
class MonthSummary:
    total: Decimal
    category_breakdown: Dict[str, Decimal]
    transaction_count: int


@dataclass
class MonthlyTotal:
    month: str  # YYYY-MM
    label: str
    total: Decimal
    category_breakdown: Dict[str, Decimal]


@dataclass
class CategoryShare:
    category: str
    amount: Decimal
    percentage: float


@dataclass
class Insight:
    type: InsightType
    message: str
    category: Optional[str] = None
    change: Optional[float] = None


@dataclass
class SpendingAnalytics:
    """Month-over-month spending picture for one target month"""

    target_month: str
    current_month: MonthSummary
    previous_month: MonthSummary
    month_over_month_change: float
    has_previous_month: bool  # False → change is not comparable and reported as 0
    monthly_data: List[MonthlyTotal]
    insights: List[Insight]
    avg_daily_spending: Decimal
    top_categories: List[CategoryShare]


@dataclass
class BudgetAlert:
    name: str
    spent: Decimal
    budget: Decimal
    percentage: float
    level: BudgetAlertLevel


@dataclass
class PersonBudget:
    name: str
    budget_limit: Optional[Decimal]
    spent: Decimal
    over_budget: bool
    percent_used: Optional[int]


@dataclass
class KeywordOverrides:
    """Per-user edits to the default keyword → category map"""

    added: Dict[str, List[str]] = field(default_factory=dict)
    removed: Dict[str, List[str]] = field(default_factory=dict)


@dataclass
class DashboardMetrics:
    burn_rate: Decimal
    variable_costs: Decimal
    total_debt: Decimal
    cash_flow: CashFlow
    discount_status: DiscountStatus
    upcoming_payments: List[UpcomingPayment]
    debt_overview: DebtOverview
    budget_alerts: List[BudgetAlert]


@dataclass
class FinancialSnapshot:
    """Structured input for the external insight summarizer"""

    monthly_income: Decimal
    total_extra_income: Decimal
    total_income: Decimal
    total_obligations: Decimal
    total_expenses: Decimal
    free_cash_flow: Decimal
    savings_rate: float
    global_budget: Optional[Decimal]
    over_global_budget: bool
    any_person_over_budget: bool
    obligations: List[Obligation]
    expenses: List[Expense]
    incomes: List[Income]
    person_budgets: List[PersonBudget]
    person_names: Dict[str, str] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.obligations and self.monthly_income == 0 and not self.expenses


@dataclass
class SpendingSummary:
    """Narrative summary returned by the insight service (or built locally)"""

    summary: str
    highlights: List[str]
    recommendations: List[str]
    trend: Trend
