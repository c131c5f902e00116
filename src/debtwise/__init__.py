"""DebtWise debt amortization and repayment projection engine."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .models import DebtAccount, PaymentFrequency
from .services.metrics import DebtMetrics, calculate_debt_metrics
from .services.payment_dates import ScheduledPayment, calculate_next_payment_dates

__all__ = [
    "BaseConfig",
    "DebtAccount",
    "DebtMetrics",
    "DevConfig",
    "PaymentFrequency",
    "ScheduledPayment",
    "calculate_debt_metrics",
    "calculate_next_payment_dates",
]
