"""
Plan catalog validation.

Validates create/update payloads against an allow-list of fields.
"""

from decimal import Decimal
from typing import Any

from investplan.config.constants import (
    MONEY_LIMIT,
    MONEY_QUANT,
    PLAN_NAME_MAX_LENGTH,
)
from investplan.models.enums import YieldType
from investplan.utils.exceptions import InvalidAmountError, InvalidPlanDataError
from investplan.validators.amount import parse_amount


REQUIRED_PLAN_FIELDS = (
    "name",
    "min_amount",
    "max_amount",
    "daily_yield_type",
    "daily_yield_value",
    "duration_days",
)
OPTIONAL_PLAN_FIELDS = ("image_url", "hash_rate")
MUTABLE_PLAN_FIELDS = frozenset(REQUIRED_PLAN_FIELDS + OPTIONAL_PLAN_FIELDS)


def _to_decimal(field: str, value: Any) -> Decimal:
    try:
        return parse_amount(value)
    except InvalidAmountError as e:
        raise InvalidPlanDataError(f"{field} must be a number") from e


def _to_money(field: str, value: Any) -> Decimal:
    amount = _to_decimal(field, value)
    if abs(amount) >= MONEY_LIMIT:
        raise InvalidPlanDataError(f"{field} must be below {MONEY_LIMIT}")
    if amount != amount.quantize(MONEY_QUANT):
        raise InvalidPlanDataError(
            f"{field} must have at most 8 decimal places"
        )
    return amount


def _to_int(field: str, value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidPlanDataError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    number = _to_decimal(field, value)
    if number != number.to_integral_value():
        raise InvalidPlanDataError(f"{field} must be an integer")
    return int(number)


def _normalize_field(field: str, value: Any) -> Any:
    if field == "name":
        if not isinstance(value, str) or not value.strip():
            raise InvalidPlanDataError("name must be a non-empty string")
        name = value.strip()
        if len(name) > PLAN_NAME_MAX_LENGTH:
            raise InvalidPlanDataError(
                f"name must be at most {PLAN_NAME_MAX_LENGTH} characters"
            )
        return name
    if field in ("min_amount", "max_amount", "daily_yield_value"):
        return _to_money(field, value)
    if field == "daily_yield_type":
        try:
            return YieldType(value).value
        except ValueError as e:
            allowed = ", ".join(t.value for t in YieldType)
            raise InvalidPlanDataError(
                f"daily_yield_type must be one of: {allowed}"
            ) from e
    if field == "duration_days":
        return _to_int(field, value)
    if field == "image_url":
        return "" if value is None else str(value)
    if field == "hash_rate":
        return None if value in (None, "") else str(value)
    raise InvalidPlanDataError(f"Unknown plan field: {field}")


def validate_plan_fields(
    data: dict[str, Any], require_all: bool = False
) -> dict[str, Any]:
    """
    Normalize and validate plan fields.

    Args:
        data: Raw field values
        require_all: Fail if any required field is missing (create)

    Returns:
        Normalized field values (only the keys present in data)

    Raises:
        InvalidPlanDataError: On unknown, missing or invalid fields
    """
    unknown = set(data) - MUTABLE_PLAN_FIELDS
    if unknown:
        raise InvalidPlanDataError(
            f"Fields cannot be changed: {', '.join(sorted(unknown))}"
        )

    if require_all:
        missing = [
            f for f in REQUIRED_PLAN_FIELDS if data.get(f) in (None, "")
        ]
        if missing:
            raise InvalidPlanDataError(
                "All fields except image and hash rate are required "
                f"(missing: {', '.join(missing)})"
            )

    return {field: _normalize_field(field, value) for field, value in data.items()}


def validate_plan_terms(fields: dict[str, Any]) -> None:
    """
    Validate a complete set of plan terms.

    Args:
        fields: Normalized values for every required field

    Raises:
        InvalidPlanDataError: If the terms are inconsistent
    """
    if fields["min_amount"] <= 0:
        raise InvalidPlanDataError("min_amount must be positive")
    if fields["max_amount"] < fields["min_amount"]:
        raise InvalidPlanDataError("max_amount must not be below min_amount")
    if fields["daily_yield_value"] <= 0:
        raise InvalidPlanDataError("daily_yield_value must be positive")
    if fields["duration_days"] <= 0:
        raise InvalidPlanDataError("duration_days must be positive")
