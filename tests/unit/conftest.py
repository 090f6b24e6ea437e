"""
Shared fixtures for unit tests.

- Plain balance holders standing in for User rows
- Transient Plan objects (never attached to a session)
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from investplan.models.enums import YieldType
from investplan.models.plan import Plan


@pytest.fixture
def account():
    """
    Balance holder with wallet 800 and bonus 300.

    Returns:
        SimpleNamespace: Object with wallet_balance and bonus_balance
    """
    return SimpleNamespace(
        wallet_balance=Decimal("800"), bonus_balance=Decimal("300")
    )


@pytest.fixture
def percentage_plan():
    """2% per day, 500..5000, 30 days."""
    return Plan(
        name="Starter",
        min_amount=Decimal("500"),
        max_amount=Decimal("5000"),
        daily_yield_type=YieldType.PERCENTAGE.value,
        daily_yield_value=Decimal("2"),
        duration_days=30,
    )


@pytest.fixture
def fixed_plan():
    """15 MT per day regardless of principal."""
    return Plan(
        name="Flat",
        min_amount=Decimal("100"),
        max_amount=Decimal("1000"),
        daily_yield_type=YieldType.FIXED.value,
        daily_yield_value=Decimal("15"),
        duration_days=10,
    )
