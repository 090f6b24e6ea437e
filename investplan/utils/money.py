"""
Money helpers.

All monetary values are Decimal quantized to the column precision.
"""

from decimal import ROUND_HALF_UP, Decimal

from investplan.config.constants import HUNDRED, MONEY_QUANT


def quantize_money(value: Decimal) -> Decimal:
    """Round to 8 decimal places (DECIMAL(18, 8))."""
    return value.quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)


def percent_of(amount: Decimal, rate_percent: Decimal) -> Decimal:
    """
    Calculate rate_percent % of amount.

    Example:
        >>> percent_of(Decimal("1000"), Decimal("2"))
        Decimal('20.00000000')
    """
    return quantize_money(amount * rate_percent / HUNDRED)
