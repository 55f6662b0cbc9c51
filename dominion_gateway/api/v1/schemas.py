"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from dominion_gateway.config import settings
from dominion_gateway.domain.models import (
    AdjustmentReason,
    BudgetAlertLevel,
    Category,
    Expense,
    Income,
    IncomeSource,
    InsightType,
    KeywordOverrides,
    LedgerSnapshot,
    Obligation,
    Payment,
    Person,
    Trend,
)

MONTH_KEY = r"^\d{4}-(0[1-9]|1[0-2])$"


# --- Ledger input -----------------------------------------------------------


class ObligationSchema(BaseModel):
    """Recurring bill or debt"""

    id: str = Field(..., min_length=1)
    name: str
    amount: Decimal = Field(..., ge=0, description="Monthly amount (repayment for debts)")
    is_uncompromised: bool = False
    is_active: bool = True
    debit_order_date: int = Field(..., ge=1, le=31)
    category: Category = Category.OTHER
    provider: str = ""
    interest_rate: Optional[Decimal] = Field(None, ge=0, description="Annual percentage")
    total_balance: Optional[Decimal] = Field(None, ge=0)
    person_id: Optional[str] = None

    def to_domain(self) -> Obligation:
        return Obligation(**self.model_dump())


class PaymentSchema(BaseModel):
    obligation_id: str
    amount: Decimal = Field(..., ge=0)
    paid_at: datetime
    month: str = Field(..., pattern=MONTH_KEY)
    expected_amount: Optional[Decimal] = Field(None, ge=0)
    adjustment_reason: Optional[AdjustmentReason] = None

    def to_domain(self) -> Payment:
        return Payment(**self.model_dump())


class ExpenseSchema(BaseModel):
    amount: Decimal = Field(..., ge=0)
    category: Category = Category.OTHER
    date: date
    name: str = ""
    person_id: Optional[str] = None

    def to_domain(self) -> Expense:
        return Expense(**self.model_dump())


class IncomeSchema(BaseModel):
    amount: Decimal = Field(..., ge=0)
    source: IncomeSource = IncomeSource.OTHER
    date: date
    is_recurring: bool = False
    name: str = ""

    def to_domain(self) -> Income:
        return Income(**self.model_dump())


class PersonSchema(BaseModel):
    id: str
    name: str
    budget_limit: Optional[Decimal] = Field(None, ge=0)

    def to_domain(self) -> Person:
        return Person(**self.model_dump())


class LedgerRequest(BaseModel):
    """Caller-supplied ledger snapshot for one user"""

    monthly_income: Decimal = Field(Decimal("0"), ge=0)
    payday: int = Field(25, ge=1, le=31)
    monthly_budget: Optional[Decimal] = Field(None, ge=0)
    levy_obligation_id: Optional[str] = None
    today: Optional[date] = Field(None, description="Evaluation date (defaults to server date)")
    obligations: List[ObligationSchema] = []
    payments: List[PaymentSchema] = []
    expenses: List[ExpenseSchema] = []
    incomes: List[IncomeSchema] = []
    persons: List[PersonSchema] = []

    def to_ledger(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            monthly_income=self.monthly_income,
            payday=self.payday,
            monthly_budget=self.monthly_budget,
            levy_obligation_id=self.levy_obligation_id,
            obligations=[o.to_domain() for o in self.obligations],
            payments=[p.to_domain() for p in self.payments],
            expenses=[e.to_domain() for e in self.expenses],
            incomes=[i.to_domain() for i in self.incomes],
            persons=[p.to_domain() for p in self.persons],
        )


class SpendingAnalyticsRequest(BaseModel):
    """Request body for POST /v1/analytics/spending"""

    target_month: Optional[str] = Field(None, pattern=MONTH_KEY, description="YYYY-MM, defaults to today's month")
    lookback_months: int = Field(settings.default_lookback_months, ge=1, le=settings.max_lookback_months)
    today: Optional[date] = None
    expenses: List[ExpenseSchema] = []


class UpcomingPaymentsRequest(BaseModel):
    obligations: List[ObligationSchema] = []
    payments: List[PaymentSchema] = []
    payday: int = Field(25, ge=1, le=31)
    today: Optional[date] = None


class DiscountStatusRequest(BaseModel):
    obligations: List[ObligationSchema] = []
    payments: List[PaymentSchema] = []
    levy_obligation_id: Optional[str] = None
    today: Optional[date] = None


class DebtPriorityRequest(BaseModel):
    obligations: List[ObligationSchema] = []


class PayoffRequest(BaseModel):
    balance: Decimal = Field(..., ge=0)
    monthly_payment: Decimal = Field(..., ge=0)
    annual_rate_percent: Decimal = Field(Decimal("0"), ge=0)
    include_schedule: bool = True


class KeywordOverridesSchema(BaseModel):
    added: Dict[Category, List[str]] = {}
    removed: Dict[Category, List[str]] = {}

    def to_domain(self) -> KeywordOverrides:
        return KeywordOverrides(
            added={c.value: k for c, k in self.added.items()},
            removed={c.value: k for c, k in self.removed.items()},
        )


class CategorizeRequest(BaseModel):
    description: str = Field(..., min_length=1)
    user_id: Optional[str] = None


# --- Responses --------------------------------------------------------------


class ResponseModel(BaseModel):
    """Responses are built straight from domain dataclasses"""

    model_config = ConfigDict(from_attributes=True)


class ObligationOut(ResponseModel):
    id: str
    name: str
    amount: float
    is_uncompromised: bool
    is_active: bool
    debit_order_date: int
    category: Category
    provider: str
    interest_rate: Optional[float] = None
    total_balance: Optional[float] = None
    person_id: Optional[str] = None


class MonthSummaryOut(ResponseModel):
    total: float
    category_breakdown: Dict[str, float]
    transaction_count: int


class MonthlyTotalOut(ResponseModel):
    month: str
    label: str
    total: float
    category_breakdown: Dict[str, float]


class CategoryShareOut(ResponseModel):
    category: str
    amount: float
    percentage: float


class InsightOut(ResponseModel):
    type: InsightType
    message: str
    category: Optional[str] = None
    change: Optional[float] = None


class SpendingAnalyticsResponse(ResponseModel):
    """Response for POST /v1/analytics/spending"""

    target_month: str
    current_month: MonthSummaryOut
    previous_month: MonthSummaryOut
    month_over_month_change: float
    has_previous_month: bool
    monthly_data: List[MonthlyTotalOut]
    insights: List[InsightOut]
    avg_daily_spending: float
    top_categories: List[CategoryShareOut]


class UpcomingPaymentOut(ResponseModel):
    obligation: ObligationOut
    due_date: date
    days_until: int
    is_paid: bool


class DiscountStatusOut(ResponseModel):
    is_secured: bool
    levy_amount: float
    due_date: date
    days_remaining: int
    paid_date: Optional[datetime] = None


class CashFlowOut(ResponseModel):
    total_income: float
    burn_rate: float
    variable_costs: float
    total_expenses: float
    free_cash_flow: float
    savings_rate: float
    is_surplus: bool


class DebtPayoffOut(ResponseModel):
    obligation: ObligationOut
    rank: int
    payoff_months: Optional[int] = None


class DebtOverviewOut(ResponseModel):
    total_debt: float
    debts: List[DebtPayoffOut]


class BudgetAlertOut(ResponseModel):
    name: str
    spent: float
    budget: float
    percentage: float
    level: BudgetAlertLevel


class DashboardResponse(ResponseModel):
    """Response for POST /v1/dashboard"""

    burn_rate: float
    variable_costs: float
    total_debt: float
    cash_flow: CashFlowOut
    discount_status: DiscountStatusOut
    upcoming_payments: List[UpcomingPaymentOut]
    debt_overview: DebtOverviewOut
    budget_alerts: List[BudgetAlertOut]


class PayoffRowOut(ResponseModel):
    month: int
    payment: float
    interest: float
    principal: float
    remaining_balance: float


class PayoffResponse(BaseModel):
    """Response for POST /v1/debts/payoff"""

    payoff_months: int
    computable: bool
    schedule: List[PayoffRowOut] = []


class SpendingSummaryOut(ResponseModel):
    summary: str
    highlights: List[str]
    recommendations: List[str]
    trend: Trend


class InsightSummaryResponse(BaseModel):
    """Response for POST /v1/insights/summary"""

    dashboard: DashboardResponse
    summary: SpendingSummaryOut
    source: str  # ai | fallback


class CategorizeResponse(BaseModel):
    description: str
    category: Category
