"""
Model enumerations.
"""

from enum import StrEnum


class PlanStatus(StrEnum):
    """Plan instance status."""

    ACTIVE = "active"
    EXPIRED = "expired"


class YieldType(StrEnum):
    """How a plan's daily yield is computed."""

    FIXED = "fixed"  # dailyYieldValue per day
    PERCENTAGE = "percentage"  # dailyYieldValue % of principal per day


class TransactionType(StrEnum):
    """Ledger transaction type."""

    INVESTMENT = "investment"
    COMMISSION = "commission"
    COLLECTION = "collection"
