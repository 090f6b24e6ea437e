"""
GlobalSettings model.

Platform-wide configuration row. The plan engine reads the commission
rates from the row keyed "main_settings".
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from investplan.config.constants import MAIN_SETTINGS_KEY
from investplan.models.base import Base
from investplan.models.types import RatePercentType, UTCDateTime


class GlobalSettings(Base):
    """Global settings row."""

    __tablename__ = "global_settings"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    config_key: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False, default=MAIN_SETTINGS_KEY
    )

    # Percentages
    referral_commission_rate: Mapped[Decimal] = mapped_column(
        RatePercentType, nullable=False, default=Decimal("0")
    )
    daily_commission_rate: Mapped[Decimal] = mapped_column(
        RatePercentType, nullable=False, default=Decimal("0")
    )

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )
