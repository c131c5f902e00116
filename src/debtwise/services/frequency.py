"""Conversion between per-period payment amounts and month equivalents."""

from __future__ import annotations

from ..models.debt import PaymentFrequency

# Biweekly deliberately counts as two payments a month (not 26/12).
MONTHLY_FACTORS: dict[str, float] = {
    PaymentFrequency.MONTHLY.value: 1.0,
    PaymentFrequency.BIWEEKLY.value: 2.0,
    PaymentFrequency.WEEKLY.value: 52 / 12,
    PaymentFrequency.SEMIMONTHLY.value: 2.0,
    PaymentFrequency.DAILY.value: 365 / 12,
}


def monthly_factor(frequency: PaymentFrequency | str | None) -> float:
    """Return payments-per-month for *frequency*; unknown values count as monthly."""

    if isinstance(frequency, PaymentFrequency):
        frequency = frequency.value
    return MONTHLY_FACTORS.get(frequency or "", 1.0)


def to_monthly(amount: float, frequency: PaymentFrequency | str | None) -> float:
    """Convert a per-period payment into its monthly equivalent."""

    return amount * monthly_factor(frequency)


def from_monthly(amount: float, frequency: PaymentFrequency | str | None) -> float:
    """Convert a monthly amount into the per-period payment for *frequency*."""

    return amount / monthly_factor(frequency)


__all__ = ["MONTHLY_FACTORS", "monthly_factor", "to_monthly", "from_monthly"]
