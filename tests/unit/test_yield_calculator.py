"""Unit tests for daily profit and end date calculation."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from investplan.models.plan import Plan
from investplan.services.plan.yield_calculator import (
    calculate_daily_profit,
    calculate_end_date,
)
from investplan.utils.money import percent_of, quantize_money


class TestDailyProfit:
    """Test daily profit by yield type."""

    def test_percentage_yield(self, percentage_plan):
        """1000 at 2% per day is 20."""
        assert calculate_daily_profit(
            percentage_plan, Decimal("1000")
        ) == Decimal("20")

    def test_percentage_yield_scales_with_principal(self, percentage_plan):
        """Profit follows the principal."""
        assert calculate_daily_profit(
            percentage_plan, Decimal("2500")
        ) == Decimal("50")

    def test_fixed_yield_ignores_principal(self, fixed_plan):
        """Fixed yield is the same for any principal."""
        assert calculate_daily_profit(fixed_plan, Decimal("100")) == Decimal("15")
        assert calculate_daily_profit(fixed_plan, Decimal("900")) == Decimal("15")

    def test_fractional_percentage(self):
        """Result is quantized to 8 places."""
        plan = Plan(
            daily_yield_type="percentage", daily_yield_value=Decimal("1.117")
        )
        assert calculate_daily_profit(plan, Decimal("333")) == Decimal(
            "3.71961000"
        )

    def test_unknown_yield_type(self):
        """Unknown yield types are rejected."""
        plan = Plan(daily_yield_type="compound", daily_yield_value=Decimal("1"))
        with pytest.raises(ValueError):
            calculate_daily_profit(plan, Decimal("100"))


class TestEndDate:
    """Test instance end date."""

    def test_end_date_adds_days(self):
        """End date is start + duration."""
        start = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
        assert calculate_end_date(start, 30) == datetime(
            2026, 1, 31, 12, 0, tzinfo=UTC
        )


class TestMoneyHelpers:
    """Test Decimal helpers."""

    def test_quantize_rounds_half_up(self):
        """Ninth decimal rounds half up."""
        assert quantize_money(Decimal("0.000000005")) == Decimal("0.00000001")

    def test_percent_of(self):
        """10% of 1000 is 100."""
        assert percent_of(Decimal("1000"), Decimal("10")) == Decimal("100")

    def test_percent_of_zero_rate(self):
        """Zero rate yields zero."""
        assert percent_of(Decimal("1000"), Decimal("0")) == Decimal("0")
