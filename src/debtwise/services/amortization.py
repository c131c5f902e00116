"""Closed-form amortization helpers (PMT formula and payment splits)."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from ..models.debt import DebtAccount
from .frequency import to_monthly


@dataclass(slots=True)
class PaymentSplit:
    """Portion of a single payment applied to principal and interest."""

    principal: float
    interest: float


def round_currency(value: float) -> float:
    """Round to cents using half-up rounding."""

    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def monthly_interest_rate(annual_rate: float) -> float:
    """Nominal monthly rate for an annual percentage rate."""

    return annual_rate / 100.0 / 12.0


def calculate_monthly_payment(principal: float, annual_rate: float, total_months: int) -> float:
    """Return the fixed payment that fully amortizes *principal*.

    Uses PMT = P * r * (1 + r)^n / ((1 + r)^n - 1) with the nominal monthly
    rate. Non-positive principal or term yields 0; a zero rate is a straight
    line split of the principal.
    """

    if principal <= 0 or total_months <= 0:
        return 0.0

    if annual_rate == 0:
        return principal / total_months

    rate = monthly_interest_rate(annual_rate)
    try:
        growth = (1 + rate) ** total_months
    except OverflowError:
        # Very long terms converge on the interest-only payment.
        return round_currency(principal * rate)
    denominator = growth - 1
    if denominator <= 0:
        return 0.0

    return round_currency(principal * (rate * growth / denominator))


def calculate_payment_distribution(
    payment: float, balance: float, monthly_rate: float
) -> PaymentSplit:
    """Split *payment* into interest and principal for the current *balance*.

    Reported interest never exceeds the payment itself, so an underwater
    payment shows as all-interest with zero principal.
    """

    interest = balance * monthly_rate
    principal = max(0.0, payment - interest)
    return PaymentSplit(principal=principal, interest=min(interest, payment))


def calculate_remaining_balance(
    initial_amount: float, down_payment: float, principal_paid: float
) -> float:
    """Outstanding principal, floored at zero."""

    return max(0.0, initial_amount - down_payment - principal_paid)


def effective_monthly_payment(debt: DebtAccount) -> float:
    """Month-equivalent payment including any recurring extra contribution."""

    monthly_payment = debt.monthly_payment
    if debt.payment_amount and debt.payment_frequency:
        monthly_payment = to_monthly(debt.payment_amount, debt.payment_frequency)

    extra = 0.0
    if debt.additional_contributions and debt.additional_contribution_amount:
        extra = debt.additional_contribution_amount
    return monthly_payment + extra


__all__ = [
    "PaymentSplit",
    "calculate_monthly_payment",
    "calculate_payment_distribution",
    "calculate_remaining_balance",
    "effective_monthly_payment",
    "monthly_interest_rate",
    "round_currency",
]
