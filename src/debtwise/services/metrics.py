"""Single consistent snapshot of a debt's current position."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date

from ..models.debt import DebtAccount
from .amortization import calculate_remaining_balance
from .payoff import (
    calculate_months_remaining,
    calculate_progress_pct,
    calculate_total_interest_remaining,
)
from .projection import calculate_payments_from_date


@dataclass(slots=True)
class DebtMetrics:
    """Derived figures shown alongside a debt."""

    remaining_balance: float
    remaining_principal: float
    months_remaining: int | None
    total_interest_paid: float
    total_interest_remaining: float
    progress_pct: float

    def to_dict(self) -> dict:
        return asdict(self)


def calculate_debt_metrics(debt: DebtAccount, *, as_of: date | None = None) -> DebtMetrics:
    """Recompute progress as of *as_of* and derive the remaining figures from it.

    The stored ``principal_paid``/``interest_paid``/``current_balance`` are
    replaced by the replayed values before estimating what remains, so "paid"
    and "remaining" always describe the same point in time.
    """

    progress = calculate_payments_from_date(debt, as_of=as_of)
    current = debt.model_copy(
        update={
            "current_balance": progress.current_balance,
            "principal_paid": progress.principal_paid,
            "interest_paid": progress.interest_paid,
        }
    )

    return DebtMetrics(
        remaining_balance=calculate_remaining_balance(
            debt.initial_amount, debt.down_payment, progress.principal_paid
        ),
        remaining_principal=max(0.0, debt.principal - progress.principal_paid),
        months_remaining=calculate_months_remaining(current),
        total_interest_paid=progress.interest_paid,
        total_interest_remaining=calculate_total_interest_remaining(current),
        progress_pct=calculate_progress_pct(
            debt.initial_amount, debt.down_payment, progress.principal_paid
        ),
    )


__all__ = ["DebtMetrics", "calculate_debt_metrics"]
