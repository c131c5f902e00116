"""Point-in-time replay of a debt's repayment history."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..logging_config import debt_log_context, get_logger
from ..models.debt import DebtAccount
from .amortization import effective_monthly_payment, round_currency
from .dates import add_months, month_start, months_between
from .payoff import calculate_months_remaining

logger = get_logger(__name__)


@dataclass(slots=True)
class PaymentProgress:
    """Accumulated repayment position as of a reference date."""

    principal_paid: float
    interest_paid: float
    current_balance: float
    months_paid: int


@dataclass(slots=True)
class AmortizationRow:
    """A single projected month in a forward amortization table."""

    due_date: date
    payment: float
    principal: float
    interest: float
    remaining_balance: float


def calculate_payments_from_date(
    debt: DebtAccount, *, as_of: date | None = None
) -> PaymentProgress:
    """Recompute principal/interest paid and balance by replaying every month.

    The replay starts at ``first_payment_date`` and runs one payment per
    calendar month up to *as_of* (capped at ``total_months`` for closed-end
    loans). Stored progress fields are ignored unless the debt is paused or
    paid off, in which case they are returned unchanged.
    """

    if debt.is_paid_off or debt.is_paused:
        return PaymentProgress(
            principal_paid=debt.principal_paid,
            interest_paid=debt.interest_paid,
            current_balance=debt.current_balance,
            months_paid=0,
        )

    reference = as_of or date.today()
    months_diff = months_between(month_start(debt.first_payment_date), month_start(reference))
    initial_balance = debt.initial_amount - debt.down_payment

    if months_diff < 0:
        return PaymentProgress(
            principal_paid=0.0,
            interest_paid=0.0,
            current_balance=initial_balance,
            months_paid=0,
        )

    rate = debt.monthly_interest_rate
    payment = effective_monthly_payment(debt)

    if debt.total_months is not None and debt.total_months > 0:
        months_to_calculate = min(months_diff, debt.total_months)
    else:
        months_to_calculate = months_diff

    balance = initial_balance
    principal_paid = 0.0
    interest_paid = 0.0
    for _ in range(months_to_calculate):
        if balance <= 0:
            break
        interest = balance * rate
        # Goes negative when the payment does not cover interest.
        principal = min(balance, payment - interest)
        interest_paid += interest
        principal_paid += principal
        balance -= principal

    return PaymentProgress(
        principal_paid=round_currency(principal_paid),
        interest_paid=round_currency(interest_paid),
        current_balance=max(0.0, round_currency(balance)),
        months_paid=months_to_calculate,
    )


def project_amortization_schedule(
    debt: DebtAccount, *, as_of: date | None = None, months: int | None = None
) -> list[AmortizationRow]:
    """Return the forward month-by-month table from the current position.

    When ``months`` is ``None`` the table runs until payoff; a debt that never
    amortizes (or is paused) yields an empty table in that case.
    """

    if debt.is_paid_off or debt.is_paused:
        return []
    if months is not None and months <= 0:
        return []

    progress = calculate_payments_from_date(debt, as_of=as_of)
    current = debt.model_copy(
        update={
            "current_balance": progress.current_balance,
            "principal_paid": progress.principal_paid,
            "interest_paid": progress.interest_paid,
        }
    )
    limit = months if months is not None else calculate_months_remaining(current)
    if not limit:
        logger.debug(
            "No amortization rows",
            extra=debt_log_context(debt, as_of=as_of, months_remaining=limit),
        )
        return []

    rate = debt.monthly_interest_rate
    payment = effective_monthly_payment(debt)
    balance = progress.current_balance
    rows: list[AmortizationRow] = []
    for index in range(limit):
        if balance <= 0:
            break
        interest = balance * rate
        principal = min(balance, payment - interest)
        balance -= principal
        rows.append(
            AmortizationRow(
                due_date=add_months(debt.first_payment_date, progress.months_paid + index),
                payment=round_currency(principal + interest),
                principal=round_currency(principal),
                interest=round_currency(interest),
                remaining_balance=max(0.0, round_currency(balance)),
            )
        )
    return rows


__all__ = [
    "AmortizationRow",
    "PaymentProgress",
    "calculate_payments_from_date",
    "project_amortization_schedule",
]
