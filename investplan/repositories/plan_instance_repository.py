"""
PlanInstance repository.

Data access layer for PlanInstance model.
"""

from datetime import datetime

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, noload

from investplan.models.enums import PlanStatus
from investplan.models.plan_instance import PlanInstance
from investplan.repositories.base import BaseRepository


class PlanInstanceRepository(BaseRepository[PlanInstance]):
    """Repository for plan instance operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(PlanInstance, session)

    async def count_by_plan_and_status(
        self, plan_id: int, status: PlanStatus
    ) -> int:
        """
        Count instances of a plan in a given status.

        Args:
            plan_id: Plan ID
            status: Instance status

        Returns:
            Number of instances
        """
        return await self.count(plan_id=plan_id, status=status.value)

    async def get_with_plan(self, instance_id: int) -> PlanInstance | None:
        """Get instance with its catalog plan freshly loaded."""
        query = (
            select(PlanInstance)
            .where(PlanInstance.id == instance_id)
            .options(joinedload(PlanInstance.plan))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.unique().scalar_one_or_none()

    async def get_all_by_user(self, user_id: int) -> list[PlanInstance]:
        """
        Get all instances for a user, newest first.

        Args:
            user_id: User ID

        Returns:
            List of instances (active and expired)
        """
        query = (
            select(PlanInstance)
            .where(PlanInstance.user_id == user_id)
            .order_by(PlanInstance.start_date.desc(), PlanInstance.id.desc())
        )
        result = await self.session.execute(query)
        return list(result.unique().scalars().all())

    async def get_active_by_user(self, user_id: int) -> list[PlanInstance]:
        """
        Get instances with status=active for a user.

        More than one element means the one-active invariant is broken.
        """
        query = select(PlanInstance).where(
            and_(
                PlanInstance.user_id == user_id,
                PlanInstance.status == PlanStatus.ACTIVE.value,
            )
        )
        result = await self.session.execute(query)
        return list(result.unique().scalars().all())

    async def get_overdue_active(
        self, now: datetime, limit: int
    ) -> list[PlanInstance]:
        """
        Get active instances whose end_date has passed.

        Args:
            now: Current time
            limit: Batch size

        Returns:
            Overdue instances, oldest end_date first
        """
        query = (
            select(PlanInstance)
            .where(
                and_(
                    PlanInstance.status == PlanStatus.ACTIVE.value,
                    PlanInstance.end_date < now,
                )
            )
            .order_by(PlanInstance.end_date.asc())
            .options(noload(PlanInstance.plan))
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.unique().scalars().all())

    async def mark_expired(self, instance: PlanInstance) -> PlanInstance:
        """Flip instance to expired."""
        instance.status = PlanStatus.EXPIRED.value
        return await self.save(instance)
