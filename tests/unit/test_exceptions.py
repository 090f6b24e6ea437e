"""Unit tests for the exception hierarchy and formatting helpers."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from investplan.utils.exceptions import (
    CollectionTooSoonError,
    ConfigurationMissingError,
    InsufficientFundsError,
    NotFoundError,
    PlanExpiredError,
    PlanInUseError,
    PlanOperationError,
    PreconditionFailedError,
)
from investplan.utils.formatters import format_hours, format_money


class TestExceptionHierarchy:
    """Error codes and subclassing."""

    @pytest.mark.parametrize(
        "error,code",
        [
            (NotFoundError("x"), "not_found"),
            (PreconditionFailedError("x"), "precondition_failed"),
            (PlanExpiredError("x"), "plan_expired"),
            (ConfigurationMissingError("x"), "configuration_missing"),
            (PlanInUseError("x", active_instances=2), "plan_in_use"),
        ],
    )
    def test_error_codes(self, error, code):
        """Each failure carries its code and message."""
        assert isinstance(error, PlanOperationError)
        assert error.error_code == code
        assert error.message == "x"

    def test_collection_too_soon_is_precondition(self):
        """Cooldown violations are precondition failures with details."""
        next_at = datetime(2026, 1, 2, tzinfo=UTC)
        error = CollectionTooSoonError(
            "wait", next_collection_at=next_at, remaining_hours=Decimal("3.5")
        )

        assert isinstance(error, PreconditionFailedError)
        assert error.next_collection_at == next_at
        assert error.remaining_hours == Decimal("3.5")

    def test_insufficient_funds_details(self):
        """Required and available amounts are kept."""
        error = InsufficientFundsError(
            "short", required=Decimal("10"), available=Decimal("4")
        )
        assert error.required == Decimal("10")
        assert error.available == Decimal("4")
        assert str(error) == "short"


class TestFormatters:
    """User-facing number formatting."""

    def test_format_money(self):
        """Two decimals, thousands separator, currency code."""
        assert format_money(Decimal("1234.5")) == "1,234.50 MT"

    def test_format_money_rounds(self):
        """Rounds half up to cents."""
        assert format_money(Decimal("0.005")) == "0.01 MT"

    def test_format_money_custom_currency(self):
        """Currency can be overridden."""
        assert format_money(Decimal("20"), currency="USDT") == "20.00 USDT"

    def test_format_hours(self):
        """One decimal."""
        assert format_hours(Decimal("23")) == "23.0"
