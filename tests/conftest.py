"""Pytest configuration and shared fixtures for DebtWise tests.

Provides a debt record factory with sensible loan defaults and helper
assertions for currency comparisons.
"""

from __future__ import annotations

from datetime import date

import pytest

from debtwise.models import DebtAccount

# Fixed reference date so replayed progress never depends on the wall clock.
REFERENCE_DATE = date(2026, 10, 17)


@pytest.fixture
def reference_date() -> date:
    return REFERENCE_DATE


@pytest.fixture
def debt_factory():
    """Factory for creating debt records in tests.

    Usage:
        debt = debt_factory(initial_amount=5000.0, interest_rate=18.0)
    """

    def _create_debt(**overrides) -> DebtAccount:
        values = {
            "id": "debt-1",
            "name": "Car Loan",
            "initial_amount": 12000.0,
            "down_payment": 0.0,
            "interest_rate": 6.0,
            "total_months": 24,
            "first_payment_date": date(2026, 8, 15),
            "monthly_payment": 531.85,
            "current_balance": 12000.0,
            "account_id": "checking",
        }
        values.update(overrides)
        return DebtAccount(**values)

    return _create_debt


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 cent)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert abs(actual - expected) <= tolerance, (
        f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
    )
