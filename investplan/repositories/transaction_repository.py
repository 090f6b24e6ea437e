"""
Transaction repository.

Append-only: entries are created, never updated or deleted.
"""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from investplan.models.enums import TransactionType
from investplan.models.transaction import Transaction
from investplan.repositories.base import BaseRepository


class TransactionRepository(BaseRepository[Transaction]):
    """Ledger repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize transaction repository."""
        super().__init__(Transaction, session)

    async def record(
        self,
        user_id: int,
        type: TransactionType,
        amount: Decimal,
        description: str,
        source_user_id: int | None = None,
        plan_instance_id: int | None = None,
    ) -> Transaction:
        """
        Append a ledger entry.

        Args:
            user_id: Owner
            type: Transaction type
            amount: Signed amount (negative = debit)
            description: Human-readable description
            source_user_id: Downstream user for commissions
            plan_instance_id: Related instance

        Returns:
            Created transaction
        """
        return await self.create(
            user_id=user_id,
            type=type.value,
            amount=amount,
            description=description,
            source_user_id=source_user_id,
            plan_instance_id=plan_instance_id,
        )

    async def get_by_user(self, user_id: int) -> list[Transaction]:
        """Get user's ledger, oldest first."""
        query = (
            select(Transaction)
            .where(Transaction.user_id == user_id)
            .order_by(Transaction.created_at.asc(), Transaction.id.asc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_net_amount(self, user_id: int) -> Decimal:
        """Sum of signed amounts for a user."""
        query = select(
            func.coalesce(func.sum(Transaction.amount), 0)
        ).where(Transaction.user_id == user_id)
        result = await self.session.execute(query)
        return Decimal(str(result.scalar() or 0))
