"""Date manipulation utilities for calendar-month arithmetic"""

import calendar
import re
from datetime import date
from typing import List
from dominion_gateway.domain.exceptions import InvalidMonthKeyError

MONTH_KEY_PATTERN = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")


def month_key(day: date) -> str:
    """Billing-cycle key in YYYY-MM form"""
    return f"{day.year:04d}-{day.month:02d}"


def month_label(day: date) -> str:
    """Short chart label, e.g. 'Oct 2026'"""
    return f"{calendar.month_abbr[day.month]} {day.year}"


def parse_month_key(key: str) -> date:
    """Parse YYYY-MM into the first day of that month"""
    match = MONTH_KEY_PATTERN.match(key or "")
    if not match:
        raise InvalidMonthKeyError(f"Invalid month key: {key!r} (expected YYYY-MM)")
    return date(int(match.group(1)), int(match.group(2)), 1)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def end_of_month(day: date) -> date:
    return day.replace(day=days_in_month(day.year, day.month))


def clamp_day(year: int, month: int, day: int) -> date:
    """
    Build a date, clamping the day-of-month to the last day of short months.

    Debit order day 31 in February 2026 → 2026-02-28.
    """
    return date(year, month, min(day, days_in_month(year, month)))


def add_months(day: date, months: int) -> date:
    """Shift by whole calendar months, clamping the day to the target month's length"""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    return clamp_day(year, month + 1, day.day)


def month_range(end_month: date, count: int) -> List[date]:
    """First days of the `count` months ending at `end_month`, oldest first"""
    first = end_month.replace(day=1)
    return [add_months(first, -offset) for offset in range(count - 1, -1, -1)]
