"""
Plan repository.

Data access layer for the plan catalog.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from investplan.models.plan import Plan
from investplan.repositories.base import BaseRepository


class PlanRepository(BaseRepository[Plan]):
    """Catalog repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize plan repository."""
        super().__init__(Plan, session)

    async def list_catalog(self) -> list[Plan]:
        """Get all plans ordered by tier (min_amount) then ID."""
        plans = await self.find_all()
        return sorted(plans, key=lambda p: (p.min_amount, p.id))
