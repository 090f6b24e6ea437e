"""
User model.

Holds the two balances moved by the plan engine and the referral link.
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from investplan.models.base import Base
from investplan.models.types import MoneyType, UTCDateTime


class User(Base):
    """
    User entity.

    Attributes:
        id: Primary key
        username: Display name used in ledger descriptions
        wallet_balance: Real currency balance (withdrawable)
        bonus_balance: Promotional balance, spendable only on plan purchase
        invited_by_id: Referring user, if any
        active_plan_instance_id: The single active plan instance, if any
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "wallet_balance >= 0", name="wallet_balance_non_negative"
        ),
        CheckConstraint(
            "bonus_balance >= 0", name="bonus_balance_non_negative"
        ),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    username: Mapped[str | None] = mapped_column(
        String(255), nullable=True, index=True
    )

    # Balances
    wallet_balance: Mapped[Decimal] = mapped_column(
        MoneyType, default=Decimal("0"), nullable=False
    )
    bonus_balance: Mapped[Decimal] = mapped_column(
        MoneyType,
        default=Decimal("0"),
        nullable=False,
        comment="Promotional balance, consumed before wallet on activation",
    )

    # Referral
    invited_by_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # At most one active plan instance
    active_plan_instance_id: Mapped[int | None] = mapped_column(
        ForeignKey(
            "plan_instances.id",
            ondelete="SET NULL",
            use_alter=True,
            name="fk_users_active_plan_instance_id_plan_instances",
        ),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=lambda: datetime.now(UTC), nullable=False
    )

    @property
    def has_active_plan(self) -> bool:
        """Whether the user currently holds an active plan instance."""
        return self.active_plan_instance_id is not None

    def __repr__(self) -> str:
        return (
            f"<User(id={self.id}, wallet={self.wallet_balance}, "
            f"bonus={self.bonus_balance})>"
        )
