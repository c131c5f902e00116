"""Debt account records consumed by the repayment calculators."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel


class PaymentFrequency(str, Enum):
    """Supported repayment cadences."""

    MONTHLY = "monthly"
    BIWEEKLY = "biweekly"
    WEEKLY = "weekly"
    SEMIMONTHLY = "semimonthly"
    DAILY = "daily"


class DebtPriority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class DebtAccount(SQLModel):
    """Installment or revolving debt as stored by the owning application.

    ``principal_paid``, ``interest_paid`` and ``current_balance`` are stored
    snapshots that may be stale; the projection services recompute them from
    ``first_payment_date``. A ``total_months`` of ``None`` marks an open-ended
    (revolving) balance. The stored balance is required: a zero balance marks
    the debt as settled for the payoff and scheduling services.
    """

    id: Optional[str] = Field(default=None)
    name: str = Field(default="", max_length=120)
    initial_amount: float = Field(ge=0)
    down_payment: float = Field(default=0.0, ge=0)
    interest_rate: float = Field(default=0.0, ge=0)
    total_months: Optional[int] = Field(default=None)
    first_payment_date: date
    payment_frequency: PaymentFrequency = Field(default=PaymentFrequency.MONTHLY)
    payment_amount: Optional[float] = Field(default=None, ge=0)
    monthly_payment: float = Field(default=0.0, ge=0)
    principal_paid: float = Field(default=0.0, ge=0)
    interest_paid: float = Field(default=0.0, ge=0)
    current_balance: float = Field(ge=0)
    additional_contributions: bool = Field(default=False)
    additional_contribution_amount: Optional[float] = Field(default=None, ge=0)
    priority: DebtPriority = Field(default=DebtPriority.MEDIUM)
    is_paused: bool = Field(default=False)
    is_paid_off: bool = Field(default=False)
    description: Optional[str] = Field(default=None)
    account_id: Optional[str] = Field(default=None)

    @property
    def principal(self) -> float:
        """Amount financed after the down payment."""
        return self.initial_amount - self.down_payment

    @property
    def monthly_interest_rate(self) -> float:
        return self.interest_rate / 100.0 / 12.0

    @property
    def is_open_ended(self) -> bool:
        return self.total_months is None or self.total_months <= 0
