"""Domain records for DebtWise."""

from __future__ import annotations

from .debt import DebtAccount, DebtPriority, PaymentFrequency
from .planned_payment import PlannedPayment, PlannedPaymentStatus

__all__ = [
    "DebtAccount",
    "DebtPriority",
    "PaymentFrequency",
    "PlannedPayment",
    "PlannedPaymentStatus",
]
