"""Time-to-payoff and remaining-interest estimates."""

from __future__ import annotations

import math

from ..logging_config import debt_log_context, get_logger
from ..models.debt import DebtAccount
from .amortization import effective_monthly_payment

logger = get_logger(__name__)


def calculate_months_remaining(debt: DebtAccount) -> int | None:
    """Return the number of monthly payments left, or ``None`` when unknowable.

    ``0`` means the debt is already settled. ``None`` covers paused debts and
    payments that do not exceed the monthly interest, which never amortize.
    Otherwise n = -ln(1 - P*r/M) / ln(1 + r), rounded up.
    """

    if debt.is_paid_off or debt.current_balance <= 0:
        return 0
    if debt.is_paused:
        return None

    rate = debt.monthly_interest_rate
    payment = effective_monthly_payment(debt)
    if payment <= 0:
        return None

    balance = debt.current_balance
    if payment <= balance * rate:
        logger.debug(
            "Payment does not cover monthly interest",
            extra=debt_log_context(debt, balance=balance, payment=payment),
        )
        return None

    if rate == 0:
        return max(0, math.ceil(balance / payment))

    numerator = -math.log(1 - (balance * rate) / payment)
    denominator = math.log(1 + rate)
    if denominator <= 0 or numerator <= 0:
        return None

    return max(0, math.ceil(numerator / denominator))


def calculate_total_interest_remaining(debt: DebtAccount) -> float:
    """Sum the interest still to be charged until payoff.

    The closed-form month count bounds a month-by-month replay, since the
    interest share changes every period.
    """

    if debt.is_paid_off or debt.current_balance <= 0:
        return 0.0

    months_remaining = calculate_months_remaining(debt)
    if not months_remaining:
        return 0.0

    rate = debt.monthly_interest_rate
    payment = effective_monthly_payment(debt)
    balance = debt.current_balance
    total_interest = 0.0
    for _ in range(months_remaining):
        if balance <= 0:
            break
        interest = balance * rate
        total_interest += interest
        balance -= min(balance, payment - interest)

    return max(0.0, total_interest)


def calculate_progress_pct(
    initial_amount: float, down_payment: float, principal_paid: float
) -> float:
    """Share of the purchase price covered so far (down payment counts), 0-100."""

    if initial_amount - down_payment <= 0:
        return 100.0

    pct = (down_payment + principal_paid) / initial_amount * 100
    # Negative amortization reports negative principal_paid.
    return max(0.0, min(pct, 100.0))


__all__ = [
    "calculate_months_remaining",
    "calculate_progress_pct",
    "calculate_total_interest_remaining",
]
