"""Tests for planned payment generation and sync against a store."""

from __future__ import annotations

import itertools
import logging
from datetime import date

import pytest

from debtwise.config import TestConfig
from debtwise.models import PlannedPayment, PlannedPaymentStatus
from debtwise.services.planned_payments import (
    cancel_scheduled_planned_payments_for_debt,
    credit_card_payment_amount,
    generate_planned_payments_for_debt,
    sync_planned_payments_for_debt,
    upsert_credit_card_planned_payment,
)


class InMemoryPlannedPaymentStore:
    """Minimal store satisfying the PlannedPaymentStore protocol."""

    def __init__(self, fail_on: set[date] | None = None):
        self.payments: dict[str, PlannedPayment] = {}
        self.fail_on = fail_on or set()
        self._ids = itertools.count(1)

    def add(self, **values) -> PlannedPayment:
        return self.create(PlannedPayment(**values))

    def list_scheduled(self, *, debt_id, start=None, end=None):
        return [
            p
            for p in self.payments.values()
            if p.debt_id == debt_id
            and p.status is PlannedPaymentStatus.SCHEDULED
            and (start is None or p.date >= start)
            and (end is None or p.date <= end)
        ]

    def create(self, payment):
        if payment.date in self.fail_on:
            raise RuntimeError("store unavailable")
        payment.id = f"pp-{next(self._ids)}"
        self.payments[payment.id] = payment
        return payment

    def update(self, payment_id, *, date, amount, description):
        payment = self.payments[payment_id]
        payment.date = date
        payment.amount = amount
        payment.description = description
        return payment

    def cancel(self, payment_id):
        self.payments[payment_id].status = PlannedPaymentStatus.CANCELLED

    def scheduled_dates(self, debt_id="debt-1"):
        return sorted(p.date for p in self.list_scheduled(debt_id=debt_id))


@pytest.fixture
def store():
    return InMemoryPlannedPaymentStore()


@pytest.fixture
def quarter_config():
    config = TestConfig()
    config.PLANNED_HORIZON_DAYS = 90
    return config


@pytest.fixture
def monthly_debt(debt_factory):
    return debt_factory(first_payment_date=date(2026, 1, 15))


class TestGeneratePlannedPayments:
    def test_creates_one_entry_per_date_in_horizon(
        self, store, monthly_debt, reference_date, quarter_config
    ):
        result = generate_planned_payments_for_debt(
            store, monthly_debt, today=reference_date, config=quarter_config
        )
        assert result.created == 3
        assert result.errors == 0
        assert store.scheduled_dates() == [date(2026, 11, 15), date(2026, 12, 15), date(2027, 1, 15)]
        created = store.list_scheduled(debt_id="debt-1")[0]
        assert created.description == "Payment: Car Loan"
        assert created.account_id == "checking"
        assert created.amount == 531.85
        assert created.source == "debt"

    def test_skips_existing_dates(self, store, monthly_debt, reference_date, quarter_config):
        store.add(date=date(2026, 11, 15), amount=531.85, debt_id="debt-1")
        result = generate_planned_payments_for_debt(
            store, monthly_debt, today=reference_date, config=quarter_config
        )
        assert result.created == 2
        assert len(store.scheduled_dates()) == 3

    def test_store_failures_are_counted(self, monthly_debt, reference_date, quarter_config):
        store = InMemoryPlannedPaymentStore(fail_on={date(2026, 12, 15)})
        result = generate_planned_payments_for_debt(
            store, monthly_debt, today=reference_date, config=quarter_config
        )
        assert result.created == 2
        assert result.errors == 1

    def test_horizon_days_overrides_config(
        self, store, monthly_debt, reference_date, quarter_config
    ):
        result = generate_planned_payments_for_debt(
            store, monthly_debt, today=reference_date, horizon_days=31, config=quarter_config
        )
        assert result.created == 1
        assert store.scheduled_dates() == [date(2026, 11, 15)]

    def test_horizon_defaults_to_configured_days(self, store, monthly_debt, reference_date):
        config = TestConfig()
        config.PLANNED_HORIZON_DAYS = 60
        generate_planned_payments_for_debt(store, monthly_debt, today=reference_date, config=config)
        assert store.scheduled_dates() == [date(2026, 11, 15), date(2026, 12, 15)]

    def test_missing_payment_logs_debt_context(
        self, store, debt_factory, reference_date, quarter_config, caplog
    ):
        debt = debt_factory(monthly_payment=0.0, payment_amount=None)
        with caplog.at_level(logging.WARNING, logger="debtwise"):
            generate_planned_payments_for_debt(
                store, debt, today=reference_date, config=quarter_config
            )
        record = next(r for r in caplog.records if r.getMessage() == "Debt has no payment amount")
        assert record.debt_id == "debt-1"
        assert record.debt_name == "Car Loan"
        assert record.frequency == "monthly"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"is_paused": True},
            {"is_paid_off": True},
            {"account_id": None},
            {"monthly_payment": 0.0, "payment_amount": None},
        ],
    )
    def test_inactive_debts_create_nothing(
        self, store, debt_factory, reference_date, quarter_config, overrides
    ):
        debt = debt_factory(first_payment_date=date(2026, 1, 15), **overrides)
        result = generate_planned_payments_for_debt(
            store, debt, today=reference_date, config=quarter_config
        )
        assert result.created == 0
        assert store.payments == {}


class TestSyncPlannedPayments:
    def test_cancels_past_entries_and_fills_horizon(
        self, store, monthly_debt, reference_date, quarter_config
    ):
        store.add(date=date(2026, 9, 15), amount=531.85, debt_id="debt-1")
        result = sync_planned_payments_for_debt(
            store, monthly_debt, today=reference_date, config=quarter_config
        )
        assert result.removed == 1
        assert result.created == 3
        assert date(2026, 9, 15) not in store.scheduled_dates()

    def test_paused_debt_loses_every_entry(
        self, store, debt_factory, reference_date, quarter_config
    ):
        debt = debt_factory(is_paused=True)
        store.add(date=date(2026, 11, 15), amount=531.85, debt_id="debt-1")
        store.add(date=date(2026, 12, 15), amount=531.85, debt_id="debt-1")
        result = sync_planned_payments_for_debt(
            store, debt, today=reference_date, config=quarter_config
        )
        assert result.removed == 2
        assert result.created == 0
        assert store.scheduled_dates() == []


class TestCreditCardPlannedPayment:
    def test_amount_includes_one_month_of_interest(self):
        assert credit_card_payment_amount(1000.0, 12.0) == 1010.0
        assert credit_card_payment_amount(0.0, 24.0) == 0.0

    def test_creates_entry_on_next_due_day(self, store, debt_factory, reference_date):
        debt = debt_factory(
            id="card", name="Visa", current_balance=1000.0, interest_rate=12.0, total_months=None
        )
        result = upsert_credit_card_planned_payment(
            store, debt, due_day_of_month=5, today=reference_date
        )
        assert result.created and not result.updated
        (entry,) = store.list_scheduled(debt_id="card")
        assert entry.date == date(2026, 11, 5)
        assert entry.amount == 1010.0

    def test_updates_first_future_entry_and_cancels_rest(self, store, debt_factory, reference_date):
        debt = debt_factory(id="card", current_balance=500.0, interest_rate=0.0)
        store.add(date=date(2026, 11, 1), amount=10.0, debt_id="card")
        store.add(date=date(2026, 12, 1), amount=10.0, debt_id="card")
        result = upsert_credit_card_planned_payment(
            store, debt, due_day_of_month=28, today=reference_date
        )
        assert result.updated and not result.created
        (entry,) = store.list_scheduled(debt_id="card")
        assert entry.date == date(2026, 10, 28)
        assert entry.amount == 500.0

    @pytest.mark.parametrize("due_day", [None, 0, 32])
    def test_missing_due_day_is_skipped(self, store, debt_factory, reference_date, due_day):
        result = upsert_credit_card_planned_payment(
            store, debt_factory(), due_day_of_month=due_day, today=reference_date
        )
        assert not result.created and not result.updated

    def test_zero_balance_is_skipped(self, store, debt_factory, reference_date):
        result = upsert_credit_card_planned_payment(
            store, debt_factory(current_balance=0.0), due_day_of_month=5, today=reference_date
        )
        assert not result.created and not result.updated


def test_cancel_scheduled_planned_payments(store):
    store.add(date=date(2026, 11, 15), amount=100.0, debt_id="debt-1")
    store.add(date=date(2026, 12, 15), amount=100.0, debt_id="debt-1")
    store.add(date=date(2026, 12, 15), amount=100.0, debt_id="other")
    assert cancel_scheduled_planned_payments_for_debt(store, "debt-1") == 2
    assert store.scheduled_dates() == []
    assert store.scheduled_dates("other") == [date(2026, 12, 15)]
