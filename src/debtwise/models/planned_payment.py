"""Planned payment records generated from debt schedules."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel


class PlannedPaymentStatus(str, Enum):
    SCHEDULED = "scheduled"
    PAID = "paid"
    CANCELLED = "cancelled"


class PlannedPayment(SQLModel):
    """Future expense entry owned by the planned-payments store."""

    id: Optional[str] = Field(default=None)
    date: dt.date
    amount: float = Field(ge=0)
    type: str = Field(default="expense")
    account_id: Optional[str] = Field(default=None)
    category_id: Optional[str] = Field(default=None)
    description: str = Field(default="")
    source: str = Field(default="debt")
    debt_id: Optional[str] = Field(default=None)
    status: PlannedPaymentStatus = Field(default=PlannedPaymentStatus.SCHEDULED)
