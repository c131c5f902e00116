"""Calendar arithmetic shared by the projection and scheduling services."""

from __future__ import annotations

from calendar import monthrange
from datetime import date, timedelta


def month_start(value: date) -> date:
    return value.replace(day=1)


def months_between(start: date, end: date) -> int:
    """Whole calendar months from *start*'s month to *end*'s month (may be negative)."""

    return (end.year - start.year) * 12 + (end.month - start.month)


def add_months(value: date, months: int) -> date:
    """Shift *value* by calendar months keeping the day of month.

    Days past the end of the target month roll over into the following month
    (Jan 31 + 1 month is Mar 3 in a common year).
    """

    index = value.month - 1 + months
    year = value.year + index // 12
    month = index % 12 + 1
    last_day = monthrange(year, month)[1]
    if value.day <= last_day:
        return date(year, month, value.day)
    return date(year, month, last_day) + timedelta(days=value.day - last_day)


def clamp_day(year: int, month: int, day: int) -> date:
    """Return ``date(year, month, day)`` with *day* clamped to the month length."""

    return date(year, month, min(day, monthrange(year, month)[1]))


__all__ = ["add_months", "clamp_day", "month_start", "months_between"]
