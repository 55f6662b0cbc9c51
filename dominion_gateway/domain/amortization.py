"""Debt payoff projections for a fixed monthly payment against a compounding balance"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Union
from dominion_gateway.domain.exceptions import NonAmortizingPaymentError
from dominion_gateway.domain.models import PayoffRow

Number = Union[Decimal, int, float]

# Schedules longer than this are reported as non-amortizing (50 years)
MAX_PAYOFF_MONTHS = 600

CENT = Decimal("0.01")


def _to_decimal(value: Number) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def monthly_rate(annual_rate_percent: Number) -> Decimal:
    return _to_decimal(annual_rate_percent) / 100 / 12


def payoff_months(balance: Number, monthly_payment: Number, annual_rate_percent: Number = 0) -> int:
    """
    Months needed to clear `balance` paying `monthly_payment` each month.

    n = ceil(-ln(1 - r*B/M) / ln(1 + r)) with r the monthly rate; with r == 0 this
    reduces to ceil(B / M).

    Returns 0 when balance or payment is not positive: no schedule can be computed,
    which is not the same as "paid off".

    Raises:
        NonAmortizingPaymentError: payment does not exceed the monthly interest, or
            the schedule would run past MAX_PAYOFF_MONTHS
    """
    balance = _to_decimal(balance)
    monthly_payment = _to_decimal(monthly_payment)
    if monthly_payment <= 0 or balance <= 0:
        return 0

    rate = monthly_rate(annual_rate_percent)
    if rate == 0:
        months = math.ceil(balance / monthly_payment)
    else:
        coverage = rate * balance / monthly_payment
        if coverage >= 1:
            raise NonAmortizingPaymentError(balance, monthly_payment, annual_rate_percent)
        months = math.ceil(-math.log(1 - float(coverage)) / math.log(1 + float(rate)))

    if months > MAX_PAYOFF_MONTHS:
        raise NonAmortizingPaymentError(balance, monthly_payment, annual_rate_percent)
    return months


def payoff_schedule(balance: Number, monthly_payment: Number, annual_rate_percent: Number = 0) -> List[PayoffRow]:
    """
    Month-by-month amortization table.

    Interest is charged on the opening balance each month and rounded to cents;
    the final payment is trimmed to whatever remains.
    """
    balance = _to_decimal(balance)
    monthly_payment = _to_decimal(monthly_payment)
    if monthly_payment <= 0 or balance <= 0:
        return []

    rate = monthly_rate(annual_rate_percent)
    rows: List[PayoffRow] = []
    remaining = balance
    month = 0
    while remaining > 0:
        month += 1
        if month > MAX_PAYOFF_MONTHS:
            raise NonAmortizingPaymentError(balance, monthly_payment, annual_rate_percent)

        interest = (remaining * rate).quantize(CENT, rounding=ROUND_HALF_UP)
        if interest >= monthly_payment:
            raise NonAmortizingPaymentError(balance, monthly_payment, annual_rate_percent)

        payment = min(monthly_payment, remaining + interest)
        principal = payment - interest
        remaining = remaining - principal
        rows.append(
            PayoffRow(
                month=month,
                payment=payment,
                interest=interest,
                principal=principal,
                remaining_balance=remaining,
            )
        )

    return rows
