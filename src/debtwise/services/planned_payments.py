"""Keep a store of planned expenses in step with each debt's payment dates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol

from ..config import BaseConfig
from ..logging_config import debt_log_context, get_logger
from ..models.debt import DebtAccount
from ..models.planned_payment import PlannedPayment, PlannedPaymentStatus
from .amortization import monthly_interest_rate, round_currency
from .payment_dates import calculate_next_payment_dates, next_due_date_from_day_of_month

logger = get_logger(__name__)


class PlannedPaymentStore(Protocol):
    """Persistence for planned payments owned by the host application."""

    def list_scheduled(
        self, *, debt_id: str, start: date | None = None, end: date | None = None
    ) -> list[PlannedPayment]:  # pragma: no cover - interface
        """Return scheduled entries for *debt_id*, optionally within a date range."""
        ...

    def create(self, payment: PlannedPayment) -> PlannedPayment:  # pragma: no cover - interface
        ...

    def update(
        self, payment_id: str, *, date: date, amount: float, description: str
    ) -> PlannedPayment:  # pragma: no cover - interface
        ...

    def cancel(self, payment_id: str) -> None:  # pragma: no cover - interface
        ...


@dataclass(slots=True)
class PlannedPaymentSyncResult:
    """Counts reported back from a sync pass."""

    created: int = 0
    removed: int = 0
    errors: int = 0


@dataclass(slots=True)
class CreditCardUpsertResult:
    created: bool = False
    updated: bool = False


def _description(debt: DebtAccount) -> str:
    return f"Payment: {debt.name}"


def generate_planned_payments_for_debt(
    store: PlannedPaymentStore,
    debt: DebtAccount,
    *,
    today: date | None = None,
    horizon_days: int | None = None,
    config: BaseConfig | None = None,
) -> PlannedPaymentSyncResult:
    """Create planned payments for every scheduled date inside the horizon.

    The horizon runs *horizon_days* past *today*, defaulting to the
    configured ``PLANNED_HORIZON_DAYS``. Dates that already have a scheduled
    entry are skipped. A failure to create one entry is logged and counted
    without stopping the rest.
    """

    result = PlannedPaymentSyncResult()
    if debt.is_paid_off or debt.is_paused or not debt.account_id:
        return result

    amount = debt.payment_amount or debt.monthly_payment
    if not amount or amount <= 0:
        logger.warning("Debt has no payment amount", extra=debt_log_context(debt))
        return result

    start = today or date.today()
    settings = config or BaseConfig()
    if horizon_days is None:
        horizon_days = settings.PLANNED_HORIZON_DAYS
    end = start + timedelta(days=horizon_days)
    scheduled = calculate_next_payment_dates(
        debt, start=start, end=end, max_events=settings.MAX_PAYMENT_EVENTS
    )
    if not scheduled:
        return result

    existing = store.list_scheduled(debt_id=debt.id, start=start, end=end)
    existing_dates = {payment.date for payment in existing}

    for entry in scheduled:
        if entry.date in existing_dates:
            continue
        try:
            store.create(
                PlannedPayment(
                    date=entry.date,
                    amount=entry.amount,
                    account_id=debt.account_id,
                    description=_description(debt),
                    debt_id=debt.id,
                )
            )
            result.created += 1
        except Exception:
            result.errors += 1
            logger.exception(
                "Error creating planned payment",
                extra=debt_log_context(debt, as_of=entry.date, payment=entry.amount),
            )

    logger.info(
        "Created %d planned payments, %d errors",
        result.created,
        result.errors,
        extra=debt_log_context(debt, as_of=start, planned_created=result.created),
    )
    return result


def sync_planned_payments_for_debt(
    store: PlannedPaymentStore,
    debt: DebtAccount,
    *,
    today: date | None = None,
    horizon_days: int | None = None,
    config: BaseConfig | None = None,
) -> PlannedPaymentSyncResult:
    """Drop stale planned payments, then generate the missing ones.

    Paused and paid-off debts lose every scheduled entry; otherwise only
    entries dated before *today* are cancelled.
    """

    reference = today or date.today()
    existing = store.list_scheduled(debt_id=debt.id)
    drop_all = debt.is_paid_off or debt.is_paused

    removed = 0
    errors = 0
    for payment in existing:
        if not drop_all and payment.date >= reference:
            continue
        try:
            store.cancel(payment.id)
            removed += 1
        except Exception:
            errors += 1
            logger.exception(
                "Error removing planned payment",
                extra=debt_log_context(debt, planned_payment_id=payment.id),
            )

    generated = generate_planned_payments_for_debt(
        store, debt, today=reference, horizon_days=horizon_days, config=config
    )
    return PlannedPaymentSyncResult(
        created=generated.created,
        removed=removed,
        errors=errors + generated.errors,
    )


def credit_card_payment_amount(balance: float, annual_rate: float) -> float:
    """Statement balance plus one month of interest, in cents."""

    return round_currency(balance * (1 + monthly_interest_rate(annual_rate)))


def upsert_credit_card_planned_payment(
    store: PlannedPaymentStore,
    debt: DebtAccount,
    *,
    due_day_of_month: int | None,
    today: date | None = None,
) -> CreditCardUpsertResult:
    """Maintain exactly one future planned payment for a revolving card balance.

    The entry falls on the next statement due day and covers the balance plus
    a month's interest. Extra future entries are cancelled.
    """

    if due_day_of_month is None or not 1 <= due_day_of_month <= 31:
        logger.debug(
            "Skipping credit-card planned payment without a due day",
            extra=debt_log_context(debt),
        )
        return CreditCardUpsertResult()

    reference = today or date.today()
    amount = credit_card_payment_amount(debt.current_balance, debt.interest_rate)
    if amount <= 0:
        return CreditCardUpsertResult()

    due_date = next_due_date_from_day_of_month(due_day_of_month, from_date=reference)
    future = [p for p in store.list_scheduled(debt_id=debt.id) if p.date >= reference]

    try:
        if future:
            head, *rest = sorted(future, key=lambda p: p.date)
            store.update(head.id, date=due_date, amount=amount, description=_description(debt))
            for payment in rest:
                store.cancel(payment.id)
            return CreditCardUpsertResult(updated=True)

        store.create(
            PlannedPayment(
                date=due_date,
                amount=amount,
                account_id=debt.account_id,
                description=_description(debt),
                debt_id=debt.id,
            )
        )
        return CreditCardUpsertResult(created=True)
    except Exception:
        logger.exception(
            "Error saving credit-card planned payment",
            extra=debt_log_context(debt, as_of=due_date, payment=amount),
        )
        return CreditCardUpsertResult()


def cancel_scheduled_planned_payments_for_debt(store: PlannedPaymentStore, debt_id: str) -> int:
    """Cancel every scheduled entry for *debt_id* and return how many succeeded."""

    cancelled = 0
    for payment in store.list_scheduled(debt_id=debt_id):
        if payment.status is not PlannedPaymentStatus.SCHEDULED:
            continue
        try:
            store.cancel(payment.id)
            cancelled += 1
        except Exception:
            logger.exception(
                "Error cancelling planned payment",
                extra={"debt_id": debt_id, "planned_payment_id": payment.id},
            )
    return cancelled


__all__ = [
    "CreditCardUpsertResult",
    "PlannedPaymentStore",
    "PlannedPaymentSyncResult",
    "cancel_scheduled_planned_payments_for_debt",
    "credit_card_payment_amount",
    "generate_planned_payments_for_debt",
    "sync_planned_payments_for_debt",
    "upsert_credit_card_planned_payment",
]
