"""
Plan model.

Catalog entry describing an investable plan tier.
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from investplan.models.base import Base
from investplan.models.enums import YieldType
from investplan.models.types import MoneyType, UTCDateTime


class Plan(Base):
    """
    Plan catalog entry.

    Attributes:
        id: Primary key
        name: Display name
        min_amount: Minimum investable principal (also the tier rank)
        max_amount: Maximum investable principal
        daily_yield_type: fixed or percentage
        daily_yield_value: Amount per day, or percent of principal per day
        duration_days: Lifetime of an instance in days
        image_url: Optional display image
        hash_rate: Optional display hash-rate label
    """

    __tablename__ = "plans"
    __table_args__ = (
        CheckConstraint(
            "min_amount <= max_amount", name="min_not_above_max"
        ),
        CheckConstraint("min_amount > 0", name="min_amount_positive"),
        CheckConstraint("duration_days > 0", name="duration_positive"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    min_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    max_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)

    daily_yield_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=YieldType.PERCENTAGE.value
    )
    # Money amount for fixed plans, so stored at money precision
    daily_yield_value: Mapped[Decimal] = mapped_column(
        MoneyType, nullable=False
    )
    duration_days: Mapped[int] = mapped_column(Integer, nullable=False)

    # Display metadata
    image_url: Mapped[str] = mapped_column(
        String(1024), nullable=False, default=""
    )
    hash_rate: Mapped[str | None] = mapped_column(
        String(100), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=lambda: datetime.now(UTC), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<Plan(id={self.id}, name={self.name!r}, "
            f"min={self.min_amount}, max={self.max_amount})>"
        )
