"""Unit tests for payment-cycle scheduling and levy discount status"""

from datetime import date, datetime
from decimal import Decimal
from dominion_gateway.domain.models import Obligation, Payment, UpcomingPayment
from dominion_gateway.domain.schedule import (
    discount_status,
    find_levy_obligation,
    next_due_date,
    sort_by_urgency,
    upcoming_payments,
)


def make_obligation(id, debit_day, active=True) -> Obligation:
    return Obligation(
        id=id,
        name=id.title(),
        amount=Decimal("100"),
        is_uncompromised=True,
        is_active=active,
        debit_order_date=debit_day,
    )


def make_payment(obligation_id, month, paid_at=datetime(2026, 10, 2, 9, 0)) -> Payment:
    return Payment(obligation_id=obligation_id, amount=Decimal("100"), paid_at=paid_at, month=month)


def test_next_due_date_this_month_or_next(today):
    assert next_due_date(25, today) == date(2026, 10, 25)
    assert next_due_date(18, today) == today
    assert next_due_date(5, today) == date(2026, 11, 5)


def test_next_due_date_clamps_to_short_months():
    assert next_due_date(31, date(2026, 2, 10)) == date(2026, 2, 28)
    assert next_due_date(30, date(2026, 1, 31)) == date(2026, 2, 28)
    assert next_due_date(31, date(2028, 2, 1)) == date(2028, 2, 29)
    assert next_due_date(31, date(2026, 4, 30)) == date(2026, 4, 30)


def test_upcoming_payments_sorted_and_flagged(today):
    obligations = [
        make_obligation("insurance", 25),
        make_obligation("phone", 20),
        make_obligation("rent", 5),
        make_obligation("gym", 22, active=False),
    ]
    payments = [
        make_payment("phone", "2026-10"),
        make_payment("insurance", "2026-09"),  # Last cycle
    ]

    items = upcoming_payments(obligations, payments, payday=25, today=today)

    assert [item.obligation.id for item in items] == ["phone", "insurance", "rent"]
    assert [item.days_until for item in items] == [2, 7, 18]
    assert [item.is_paid for item in items] == [True, False, False]
    assert items[2].due_date == date(2026, 11, 5)


def test_duplicate_payments_are_an_existence_check(today):
    obligations = [make_obligation("phone", 20)]
    payments = [make_payment("phone", "2026-10"), make_payment("phone", "2026-10")]

    items = upcoming_payments(obligations, payments, payday=25, today=today)

    assert len(items) == 1
    assert items[0].is_paid is True


def test_overdue_items_sort_first():
    items = [
        UpcomingPayment(obligation=make_obligation(str(days), 1), due_date=date(2026, 10, 1), days_until=days, is_paid=False)
        for days in (2, -1, 5)
    ]
    assert [item.days_until for item in sort_by_urgency(items)] == [-1, 2, 5]


def test_discount_secured_when_levy_paid_this_month(today, levy):
    paid_at = datetime(2026, 10, 1, 7, 45)
    status = discount_status(levy, [make_payment("levy", "2026-10", paid_at)], today)

    assert status.is_secured is True
    assert status.days_remaining == 0
    assert status.paid_date == paid_at
    assert status.levy_amount == Decimal("1850")
    assert status.due_date == date(2026, 10, 31)


def test_discount_unsecured_counts_days_to_month_end(today, levy):
    payments = [
        make_payment("levy", "2026-09"),  # Previous month
        make_payment("rent", "2026-10"),  # Other obligation
    ]
    status = discount_status(levy, payments, today)

    assert status.is_secured is False
    assert status.days_remaining == 13
    assert status.paid_date is None
    assert status.due_date == date(2026, 10, 31)


def test_discount_on_last_day_of_month(levy):
    status = discount_status(levy, [], date(2026, 10, 31))
    assert status.days_remaining == 0
    assert status.is_secured is False


def test_discount_without_levy(today):
    status = discount_status(None, [], today)

    assert status.is_secured is False
    assert status.levy_amount == 0
    assert status.due_date == today
    assert status.days_remaining == 0


def test_find_levy_by_id_or_name(levy, rent):
    assert find_levy_obligation([rent, levy]) is levy
    assert find_levy_obligation([rent, levy], levy_obligation_id="rent") is rent
    assert find_levy_obligation([rent], levy_obligation_id="missing") is None
    assert find_levy_obligation([rent]) is None
