"""
Standard type definitions for database models.

Provides consistent types for monetary, percentage and timestamp fields.
"""

from datetime import UTC, datetime

from sqlalchemy import DECIMAL, DateTime
from sqlalchemy.types import TypeDecorator

# Standard money type for amounts, balances, profits
# Precision: 18 digits total, 8 after decimal point
MoneyType = DECIMAL(18, 8)

# Precise rate percentage type for yield and commission rates
# Precision: 10 digits total, 4 after decimal point
RatePercentType = DECIMAL(10, 4)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware datetime column.

    Stores UTC and always returns aware datetimes, including on backends
    that drop tzinfo (SQLite).
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("Naive datetime passed to UTCDateTime column")
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
