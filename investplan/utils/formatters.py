"""
Formatting helpers for user-facing messages.
"""

from decimal import ROUND_HALF_UP, Decimal

from investplan.config.settings import settings


def format_money(value: Decimal, currency: str | None = None) -> str:
    """
    Format amount with two decimals and currency code.

    Example:
        >>> format_money(Decimal("1234.5"))
        '1,234.50 MT'
    """
    code = currency or settings.currency_code
    rounded = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{rounded:,.2f} {code}"


def format_hours(value: Decimal) -> str:
    """Format hours with one decimal."""
    return f"{value:.1f}"
