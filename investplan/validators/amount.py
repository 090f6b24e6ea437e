"""
Amount validation.

Parses user-supplied investment amounts into Decimal before any mutation.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from investplan.utils.exceptions import InvalidAmountError
from investplan.utils.formatters import format_money


def parse_amount(value: Any) -> Decimal:
    """
    Parse a numeric amount.

    Args:
        value: Decimal, int, float or numeric string

    Returns:
        Finite Decimal

    Raises:
        InvalidAmountError: If value is not a finite number
    """
    if isinstance(value, bool) or value is None:
        raise InvalidAmountError("Investment amount must be a number")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation as e:
            raise InvalidAmountError(
                f"Investment amount must be a number, got {value!r}"
            ) from e
    else:
        raise InvalidAmountError("Investment amount must be a number")

    if not amount.is_finite():
        raise InvalidAmountError("Investment amount must be a finite number")

    return amount


def validate_amount_in_range(
    amount: Decimal, min_amount: Decimal, max_amount: Decimal
) -> None:
    """
    Check min_amount <= amount <= max_amount.

    Raises:
        InvalidAmountError: If outside the range
    """
    if amount < min_amount or amount > max_amount:
        raise InvalidAmountError(
            f"Investment amount must be between {format_money(min_amount)} "
            f"and {format_money(max_amount)}"
        )
