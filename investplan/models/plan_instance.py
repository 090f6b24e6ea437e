"""
PlanInstance model.

A user's purchased plan. Never deleted: expired instances are the history
used for renewal.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from investplan.models.base import Base
from investplan.models.enums import PlanStatus
from investplan.models.types import MoneyType, UTCDateTime


if TYPE_CHECKING:
    from investplan.models.plan import Plan


class PlanInstance(Base):
    """
    PlanInstance entity.

    daily_profit is computed once from the plan's yield fields at creation
    and never recomputed, so later catalog edits do not touch it.
    """

    __tablename__ = "plan_instances"
    __table_args__ = (
        CheckConstraint(
            "invested_amount > 0", name="invested_amount_positive"
        ),
        CheckConstraint(
            "total_collected >= 0", name="total_collected_non_negative"
        ),
        Index("idx_plan_instances_plan_status", "plan_id", "status"),
        Index("idx_plan_instances_status_end", "status", "end_date"),
        # One active instance per user (partial unique index)
        Index(
            "uq_plan_instances_one_active_per_user",
            "user_id",
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    plan_id: Mapped[int | None] = mapped_column(
        ForeignKey("plans.id", ondelete="SET NULL"),
        nullable=True,
    )

    invested_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    daily_profit: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)

    start_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    end_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    last_collected_date: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False
    )
    total_collected: Mapped[Decimal] = mapped_column(
        MoneyType, default=Decimal("0"), nullable=False
    )

    status: Mapped[str] = mapped_column(
        String(20),
        default=PlanStatus.ACTIVE.value,
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=lambda: datetime.now(UTC), nullable=False
    )

    plan: Mapped["Plan | None"] = relationship(lazy="joined")

    @property
    def is_active(self) -> bool:
        return self.status == PlanStatus.ACTIVE.value

    def is_past_end(self, now: datetime) -> bool:
        """Whether now is strictly after end_date."""
        return now > self.end_date

    def __repr__(self) -> str:
        return (
            f"<PlanInstance(id={self.id}, user_id={self.user_id}, "
            f"plan_id={self.plan_id}, status={self.status})>"
        )
