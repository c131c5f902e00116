"""Concrete upcoming payment dates for a debt's repayment cadence."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from ..logging_config import debt_log_context, get_logger
from ..models.debt import DebtAccount, PaymentFrequency
from .dates import add_months, clamp_day, months_between

logger = get_logger(__name__)

MAX_PAYMENT_EVENTS = 100

_FIXED_PERIOD_DAYS: dict[str, int] = {
    PaymentFrequency.BIWEEKLY.value: 14,
    PaymentFrequency.WEEKLY.value: 7,
    PaymentFrequency.DAILY.value: 1,
}


@dataclass(slots=True)
class ScheduledPayment:
    """A payment expected on ``date`` for ``amount`` (per-period amount)."""

    date: date
    amount: float
    debt_id: str | None = None
    debt_name: str = ""


def _frequency_key(frequency: PaymentFrequency | str | None) -> str:
    if isinstance(frequency, PaymentFrequency):
        return frequency.value
    return frequency or PaymentFrequency.MONTHLY.value


def next_payment_date(current: date, frequency: PaymentFrequency | str | None) -> date:
    """Step one period forward from *current*.

    Semimonthly payments fall on the 1st and 15th: anything before the 15th
    moves to the 15th, anything from the 15th on moves to the 1st of the
    following month. Unknown cadences step monthly.
    """

    key = _frequency_key(frequency)
    if key in _FIXED_PERIOD_DAYS:
        return current + timedelta(days=_FIXED_PERIOD_DAYS[key])
    if key == PaymentFrequency.SEMIMONTHLY.value:
        if current.day < 15:
            return current.replace(day=15)
        return add_months(current.replace(day=1), 1)
    return add_months(current, 1)


def estimate_periods_passed(
    start: date, end: date, frequency: PaymentFrequency | str | None
) -> int:
    """Rough count of payment periods between two dates.

    Calendar-based cadences (monthly, semimonthly) count month boundaries and
    may overshoot by a period.
    """

    key = _frequency_key(frequency)
    if key in _FIXED_PERIOD_DAYS:
        return (end - start).days // _FIXED_PERIOD_DAYS[key]
    months = months_between(start, end)
    if key == PaymentFrequency.SEMIMONTHLY.value:
        return months * 2
    return months


def _advance(current: date, frequency: PaymentFrequency | str | None, periods: int) -> date:
    key = _frequency_key(frequency)
    if key in _FIXED_PERIOD_DAYS:
        return current + timedelta(days=_FIXED_PERIOD_DAYS[key] * periods)
    for _ in range(periods):
        current = next_payment_date(current, key)
    return current


def calculate_next_payment_dates(
    debt: DebtAccount,
    *,
    start: date | None = None,
    end: date | None = None,
    max_events: int = MAX_PAYMENT_EVENTS,
) -> list[ScheduledPayment]:
    """Return the payments falling within ``[start, end]`` in date order.

    ``end`` defaults to one calendar month after ``start``. The series is
    anchored on the exact ``first_payment_date`` so weekly and daily cadences
    keep their weekday alignment. At most ``max_events`` entries are produced.
    """

    if debt.is_paid_off or debt.is_paused or debt.current_balance <= 0:
        return []

    frequency = _frequency_key(debt.payment_frequency)
    amount = debt.payment_amount or debt.monthly_payment
    if not amount or amount <= 0:
        return []

    window_start = start or date.today()
    window_end = end or add_months(window_start, 1)

    current = debt.first_payment_date
    if current < window_start:
        estimate = estimate_periods_passed(current, window_start, frequency)
        # Land one period short of the estimate, then walk forward.
        current = _advance(current, frequency, max(0, estimate - 1))
        while current < window_start:
            current = next_payment_date(current, frequency)

    payments: list[ScheduledPayment] = []
    while current <= window_end:
        if len(payments) >= max_events:
            logger.debug(
                "Payment dates capped at %d",
                max_events,
                extra=debt_log_context(debt, as_of=window_start),
            )
            break
        payments.append(
            ScheduledPayment(date=current, amount=amount, debt_id=debt.id, debt_name=debt.name)
        )
        current = next_payment_date(current, frequency)

    return payments


def upcoming_payments(
    debts: Iterable[DebtAccount],
    *,
    start: date | None = None,
    end: date | None = None,
    max_events: int = MAX_PAYMENT_EVENTS,
) -> list[ScheduledPayment]:
    """Merge the payment dates of several debts into one ordered list."""

    window_start = start or date.today()
    merged: list[ScheduledPayment] = []
    for debt in debts:
        merged.extend(
            calculate_next_payment_dates(
                debt, start=window_start, end=end, max_events=max_events
            )
        )
    merged.sort(key=lambda payment: (payment.date, payment.debt_name))
    return merged


def next_due_date_from_day_of_month(day_of_month: int, *, from_date: date | None = None) -> date:
    """Next date strictly after *from_date* falling on a statement due day.

    The day is clamped to short months (31 becomes Feb 28/29). Out-of-range
    days fall back to the first of the following month.
    """

    reference = from_date or date.today()
    if day_of_month < 1 or day_of_month > 31:
        return add_months(reference.replace(day=1), 1)

    candidate = clamp_day(reference.year, reference.month, day_of_month)
    if candidate > reference:
        return candidate
    following = add_months(reference.replace(day=1), 1)
    return clamp_day(following.year, following.month, day_of_month)


__all__ = [
    "MAX_PAYMENT_EVENTS",
    "ScheduledPayment",
    "calculate_next_payment_dates",
    "estimate_periods_passed",
    "next_due_date_from_day_of_month",
    "next_payment_date",
    "upcoming_payments",
]
