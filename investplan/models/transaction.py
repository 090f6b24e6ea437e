"""
Transaction model.

Append-only ledger record. Negative amounts debit the wallet, positive
amounts credit it.
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from investplan.models.base import Base
from investplan.models.types import MoneyType, UTCDateTime


class Transaction(Base):
    """
    Transaction entity.

    Attributes:
        id: Primary key
        user_id: Owner of the ledger entry
        type: investment, commission or collection
        amount: Signed amount
        description: Human-readable description
        source_user_id: Downstream user for commission entries
        plan_instance_id: Instance the entry relates to, if any
        created_at: Timestamp
    """

    __tablename__ = "transactions"
    __table_args__ = (
        Index("idx_transactions_user_created", "user_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    source_user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    plan_instance_id: Mapped[int | None] = mapped_column(
        ForeignKey("plan_instances.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, default=lambda: datetime.now(UTC), nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<Transaction(id={self.id}, user_id={self.user_id}, "
            f"type={self.type}, amount={self.amount})>"
        )
