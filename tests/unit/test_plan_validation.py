"""Unit tests for plan catalog payload validation."""

from decimal import Decimal

import pytest

from investplan.utils.exceptions import InvalidPlanDataError
from investplan.validators import validate_plan_fields, validate_plan_terms


@pytest.fixture
def plan_payload():
    """Complete create payload."""
    return {
        "name": "  Gold  ",
        "min_amount": "1000",
        "max_amount": 10000,
        "daily_yield_type": "percentage",
        "daily_yield_value": "2.5",
        "duration_days": "60",
    }


class TestValidatePlanFields:
    """Test field normalization and allow-list."""

    def test_normalizes_complete_payload(self, plan_payload):
        """Strings are stripped and numbers become Decimal/int."""
        fields = validate_plan_fields(plan_payload, require_all=True)

        assert fields["name"] == "Gold"
        assert fields["min_amount"] == Decimal("1000")
        assert fields["max_amount"] == Decimal("10000")
        assert fields["daily_yield_value"] == Decimal("2.5")
        assert fields["duration_days"] == 60

    def test_missing_required_field(self, plan_payload):
        """Create requires every field but image and hash rate."""
        del plan_payload["duration_days"]

        with pytest.raises(InvalidPlanDataError) as exc_info:
            validate_plan_fields(plan_payload, require_all=True)
        assert "duration_days" in exc_info.value.message

    def test_partial_payload_allowed_for_update(self):
        """Updates may carry a subset."""
        assert validate_plan_fields({"hash_rate": "120 TH/s"}) == {
            "hash_rate": "120 TH/s"
        }

    @pytest.mark.parametrize("field", ["id", "created_at", "status"])
    def test_unknown_field_rejected(self, field):
        """Fields outside the allow-list cannot be written."""
        with pytest.raises(InvalidPlanDataError):
            validate_plan_fields({field: 1})

    def test_invalid_yield_type(self):
        """Only fixed and percentage are accepted."""
        with pytest.raises(InvalidPlanDataError):
            validate_plan_fields({"daily_yield_type": "compound"})

    def test_fractional_duration_rejected(self):
        """duration_days must be whole."""
        with pytest.raises(InvalidPlanDataError):
            validate_plan_fields({"duration_days": "1.5"})

    def test_blank_name_rejected(self):
        """Name must not be blank."""
        with pytest.raises(InvalidPlanDataError):
            validate_plan_fields({"name": "   "})

    @pytest.mark.parametrize(
        "field", ["min_amount", "max_amount", "daily_yield_value"]
    )
    def test_money_precision_kept(self, field):
        """Eight decimal places fit the money columns exactly."""
        assert validate_plan_fields({field: "12.345678"}) == {
            field: Decimal("12.345678")
        }

    @pytest.mark.parametrize(
        "field", ["min_amount", "max_amount", "daily_yield_value"]
    )
    @pytest.mark.parametrize("value", ["0.000000001", "1.123456789"])
    def test_money_scale_overflow_rejected(self, field, value):
        """More than eight decimal places cannot be stored."""
        with pytest.raises(InvalidPlanDataError) as exc_info:
            validate_plan_fields({field: value})
        assert "decimal places" in exc_info.value.message

    @pytest.mark.parametrize(
        "field", ["min_amount", "max_amount", "daily_yield_value"]
    )
    @pytest.mark.parametrize("value", ["10000000000", "1e12", "-10000000000"])
    def test_money_magnitude_overflow_rejected(self, field, value):
        """Values with more than ten integer digits cannot be stored."""
        with pytest.raises(InvalidPlanDataError):
            validate_plan_fields({field: value})

    def test_largest_money_value_accepted(self):
        """The column maximum itself is valid."""
        fields = validate_plan_fields({"max_amount": "9999999999.99999999"})
        assert fields["max_amount"] == Decimal("9999999999.99999999")

    def test_image_url_none_becomes_empty(self):
        """Missing image is stored as empty string."""
        assert validate_plan_fields({"image_url": None}) == {"image_url": ""}


class TestValidatePlanTerms:
    """Test cross-field consistency."""

    def _terms(self, **overrides):
        terms = {
            "name": "Gold",
            "min_amount": Decimal("1000"),
            "max_amount": Decimal("10000"),
            "daily_yield_type": "percentage",
            "daily_yield_value": Decimal("2"),
            "duration_days": 60,
        }
        terms.update(overrides)
        return terms

    def test_valid_terms(self):
        """Consistent terms pass."""
        validate_plan_terms(self._terms())

    def test_equal_min_and_max(self):
        """A single-amount plan is allowed."""
        validate_plan_terms(self._terms(max_amount=Decimal("1000")))

    @pytest.mark.parametrize(
        "overrides",
        [
            {"min_amount": Decimal("0")},
            {"max_amount": Decimal("999")},
            {"daily_yield_value": Decimal("0")},
            {"duration_days": 0},
        ],
    )
    def test_invalid_terms(self, overrides):
        """Inconsistent terms are rejected."""
        with pytest.raises(InvalidPlanDataError):
            validate_plan_terms(self._terms(**overrides))
