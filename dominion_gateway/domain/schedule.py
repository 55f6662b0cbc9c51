"""Payment-cycle scheduling and levy discount status"""

from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional
from dominion_gateway.domain.models import DiscountStatus, Obligation, Payment, UpcomingPayment
from dominion_gateway.utils.date_utils import add_months, clamp_day, end_of_month, month_key

# Matches "Levy", "Levies", "HOA levy" ...
LEVY_NAME_FRAGMENT = "lev"


def next_due_date(debit_order_date: int, today: date) -> date:
    """
    Next debit date on or after today.

    Day-of-month past the end of a short month is clamped to its last day.
    """
    if debit_order_date >= today.day:
        return clamp_day(today.year, today.month, debit_order_date)
    following = add_months(today.replace(day=1), 1)
    return clamp_day(following.year, following.month, debit_order_date)


def is_paid_for_month(obligation_id: str, payments: Iterable[Payment], month: str) -> bool:
    """Existence check; duplicate payments for the same month are tolerated"""
    return any(p.obligation_id == obligation_id and p.month == month for p in payments)


def sort_by_urgency(items: Iterable[UpcomingPayment]) -> List[UpcomingPayment]:
    """Soonest first; overdue (negative days_until) ahead of everything else"""
    return sorted(items, key=lambda item: item.days_until)


def upcoming_payments(
    obligations: Iterable[Obligation],
    payments: List[Payment],
    payday: int,
    today: date,
) -> List[UpcomingPayment]:
    """
    Due date and paid flag for every active obligation in the current cycle.

    `payday` identifies the household's pay cycle; due dates follow each
    obligation's own debit order day.
    """
    current_month = month_key(today)
    items = []
    for obligation in obligations:
        if not obligation.is_active:
            continue
        due_date = next_due_date(obligation.debit_order_date, today)
        items.append(
            UpcomingPayment(
                obligation=obligation,
                due_date=due_date,
                days_until=(due_date - today).days,
                is_paid=is_paid_for_month(obligation.id, payments, current_month),
            )
        )
    return sort_by_urgency(items)


def find_levy_obligation(
    obligations: Iterable[Obligation],
    levy_obligation_id: Optional[str] = None,
) -> Optional[Obligation]:
    """Levy by explicit id, otherwise the first obligation whose name mentions a levy"""
    obligations = list(obligations)
    if levy_obligation_id is not None:
        return next((o for o in obligations if o.id == levy_obligation_id), None)
    return next((o for o in obligations if LEVY_NAME_FRAGMENT in o.name.lower()), None)


def discount_status(
    levy_obligation: Optional[Obligation],
    payments: Iterable[Payment],
    today: date,
) -> DiscountStatus:
    """
    Whether this month's levy discount is secured.

    Secured as soon as a payment for (levy, current month) exists; otherwise the
    days left until month end are reported. No levy → unsecured, zero amount, due today.
    """
    if levy_obligation is None:
        return DiscountStatus(is_secured=False, levy_amount=Decimal("0"), due_date=today, days_remaining=0)

    current_month = month_key(today)
    due_date = end_of_month(today)
    payment = next(
        (p for p in payments if p.obligation_id == levy_obligation.id and p.month == current_month),
        None,
    )

    if payment is not None:
        return DiscountStatus(
            is_secured=True,
            levy_amount=levy_obligation.amount,
            due_date=due_date,
            days_remaining=0,
            paid_date=payment.paid_at,
        )

    return DiscountStatus(
        is_secured=False,
        levy_amount=levy_obligation.amount,
        due_date=due_date,
        days_remaining=max(0, (due_date - today).days),
    )
