"""
Unit tests for referral commission skip rules.

Skips are decided before any database access, so a mocked session is
enough here. Payouts are covered by the integration tests.
"""

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from investplan.services.referral import CommissionRates, ReferralCommissionEngine


@pytest.fixture
def rates():
    """10% on activation, 5% on daily profit."""
    return CommissionRates(
        referral_commission_rate=Decimal("10"),
        daily_commission_rate=Decimal("5"),
    )


@pytest.fixture
def engine(mock_session):
    """Engine with a mocked session."""
    return ReferralCommissionEngine(mock_session)


class TestCommissionSkips:
    """Cases where nothing is paid."""

    @pytest.mark.asyncio
    async def test_no_referrer(self, engine, rates, mock_session):
        """Users without a referrer generate no commission."""
        user = SimpleNamespace(id=1, invited_by_id=None)

        result = await engine.pay_activation_commission(
            user, Decimal("1000"), rates
        )

        assert result is None
        mock_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_self_referral(self, engine, rates, mock_session):
        """A user never pays themselves."""
        user = SimpleNamespace(id=7, invited_by_id=7)

        result = await engine.pay_daily_commission(user, Decimal("20"), rates)

        assert result is None
        mock_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_zero_rate(self, engine, mock_session):
        """A zero rate pays nothing."""
        user = SimpleNamespace(id=1, invited_by_id=2)
        zero = CommissionRates(
            referral_commission_rate=Decimal("0"),
            daily_commission_rate=Decimal("0"),
        )

        result = await engine.pay_activation_commission(
            user, Decimal("1000"), zero
        )

        assert result is None
        mock_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_database_error_is_contained(self, engine, rates, mock_session):
        """Payout failures roll back and return None."""
        user = SimpleNamespace(id=1, invited_by_id=2)
        engine.user_repo.get_for_update = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("down"))
        )

        result = await engine.pay_activation_commission(
            user, Decimal("1000"), rates
        )

        assert result is None
        mock_session.rollback.assert_awaited_once()
        mock_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unexpected_error_is_contained(
        self, engine, rates, mock_session
    ):
        """Non-database errors during payout are contained too."""
        user = SimpleNamespace(id=1, invited_by_id=2)
        referrer = SimpleNamespace(
            id=2, has_active_plan=True, wallet_balance=Decimal("0")
        )
        engine.user_repo.get_for_update = AsyncMock(return_value=referrer)
        engine.user_repo.save = AsyncMock(side_effect=RuntimeError("boom"))

        result = await engine.pay_daily_commission(user, Decimal("20"), rates)

        assert result is None
        mock_session.rollback.assert_awaited_once()
        mock_session.commit.assert_not_awaited()
