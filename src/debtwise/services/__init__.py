"""Service module exports."""

from . import (
    amortization,
    dates,
    frequency,
    metrics,
    payment_dates,
    payoff,
    planned_payments,
    projection,
)

__all__ = [
    "amortization",
    "dates",
    "frequency",
    "metrics",
    "payment_dates",
    "payoff",
    "planned_payments",
    "projection",
]
