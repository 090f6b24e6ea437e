"""
Datetime utilities.

Provides timezone-aware datetime functions.
"""

from collections.abc import Callable
from datetime import UTC, datetime

# Injectable wall clock
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """
    Get current UTC datetime with timezone info.

    Returns:
        Current datetime in UTC with timezone awareness
    """
    return datetime.now(UTC)
