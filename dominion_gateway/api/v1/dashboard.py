"""Dashboard metrics and the independently callable calculators behind them"""

import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request

from dominion_gateway.api.v1.schemas import (
    DashboardResponse,
    DebtOverviewOut,
    DebtPriorityRequest,
    DiscountStatusOut,
    DiscountStatusRequest,
    LedgerRequest,
    PayoffRequest,
    PayoffResponse,
    PayoffRowOut,
    UpcomingPaymentOut,
    UpcomingPaymentsRequest,
)
from dominion_gateway.api.dependencies import get_request_id, get_today
from dominion_gateway.config import settings
from dominion_gateway.domain.amortization import payoff_months, payoff_schedule
from dominion_gateway.domain.dashboard import build_dashboard, debt_overview
from dominion_gateway.domain.exceptions import NonAmortizingPaymentError
from dominion_gateway.domain.schedule import discount_status, find_levy_obligation, upcoming_payments
from dominion_gateway.infrastructure.observability.metrics import analytics_request_counter

router = APIRouter()


@router.post("/dashboard", response_model=DashboardResponse)
def get_dashboard(request_body: LedgerRequest, server_today: date = Depends(get_today)):
    """Burn rate, debt, cash flow, levy status, upcoming payments and budget alerts"""
    metrics = build_dashboard(
        request_body.to_ledger(),
        request_body.today or server_today,
        settings.budget_warning_percent,
    )
    analytics_request_counter.labels(endpoint="dashboard").inc()
    return DashboardResponse.model_validate(metrics)


@router.post("/payments/upcoming", response_model=list[UpcomingPaymentOut])
def get_upcoming_payments(request_body: UpcomingPaymentsRequest, server_today: date = Depends(get_today)):
    """Active obligations with next due date, soonest (or overdue) first"""
    items = upcoming_payments(
        [o.to_domain() for o in request_body.obligations],
        [p.to_domain() for p in request_body.payments],
        request_body.payday,
        request_body.today or server_today,
    )
    return [UpcomingPaymentOut.model_validate(item) for item in items]


@router.post("/discount-status", response_model=DiscountStatusOut)
def get_discount_status(request_body: DiscountStatusRequest, server_today: date = Depends(get_today)):
    """Whether this month's levy has been paid in time to keep the discount"""
    levy = find_levy_obligation([o.to_domain() for o in request_body.obligations], request_body.levy_obligation_id)
    status = discount_status(levy, [p.to_domain() for p in request_body.payments], request_body.today or server_today)
    return DiscountStatusOut.model_validate(status)


@router.post("/debts/priority", response_model=DebtOverviewOut)
def get_debt_priority(request_body: DebtPriorityRequest):
    """Debts in avalanche order (highest interest first) with payoff months"""
    overview = debt_overview([o.to_domain() for o in request_body.obligations])
    return DebtOverviewOut.model_validate(overview)


@router.post("/debts/payoff", response_model=PayoffResponse)
def get_payoff(request_body: PayoffRequest, request: Request):
    """
    Months to payoff and optional amortization table.

    Returns 422 when the payment never covers the monthly interest.
    """
    try:
        months = payoff_months(request_body.balance, request_body.monthly_payment, request_body.annual_rate_percent)
        schedule = []
        if request_body.include_schedule:
            schedule = payoff_schedule(
                request_body.balance,
                request_body.monthly_payment,
                request_body.annual_rate_percent,
            )
    except NonAmortizingPaymentError as e:
        logging.info(f"Non-amortizing payoff request: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    return PayoffResponse(
        payoff_months=months,
        computable=months > 0,
        schedule=[PayoffRowOut.model_validate(row) for row in schedule],
    )
