"""
Plan yield calculator.

Turns a plan's yield fields into the frozen terms of a new instance.
"""

from datetime import datetime, timedelta
from decimal import Decimal

from investplan.models.enums import YieldType
from investplan.models.plan import Plan
from investplan.utils.money import percent_of, quantize_money


def calculate_daily_profit(plan: Plan, principal: Decimal) -> Decimal:
    """
    Daily profit for an instance of plan funded with principal.

    fixed: daily_yield_value. percentage: principal * value / 100.

    Example:
        >>> # percentage plan, value 2, principal 1000
        >>> calculate_daily_profit(plan, Decimal("1000"))
        Decimal('20.00000000')
    """
    if plan.daily_yield_type == YieldType.FIXED.value:
        return quantize_money(Decimal(plan.daily_yield_value))
    if plan.daily_yield_type == YieldType.PERCENTAGE.value:
        return percent_of(principal, Decimal(plan.daily_yield_value))
    raise ValueError(f"Unknown yield type: {plan.daily_yield_type}")


def calculate_end_date(start_date: datetime, duration_days: int) -> datetime:
    """End of an instance: start_date + duration_days."""
    return start_date + timedelta(days=duration_days)
