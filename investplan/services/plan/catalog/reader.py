"""
Catalog reader.

Read-only views of the catalog and of a user's plan instances.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from investplan.models.plan import Plan
from investplan.models.plan_instance import PlanInstance
from investplan.repositories.plan_instance_repository import (
    PlanInstanceRepository,
)
from investplan.repositories.plan_repository import PlanRepository
from investplan.repositories.user_repository import UserRepository
from investplan.services.plan.results import CatalogView
from investplan.utils.exceptions import NotFoundError


class PlanCatalogReader:
    """Catalog and history queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize catalog reader."""
        self.session = session
        self.plan_repo = PlanRepository(session)
        self.instance_repo = PlanInstanceRepository(session)
        self.user_repo = UserRepository(session)

    async def list_plans(self, user_id: int) -> CatalogView:
        """
        All plans plus the user's active instance (with its plan loaded).

        Raises:
            NotFoundError: Unknown user
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found.")

        active_instance = None
        if user.active_plan_instance_id is not None:
            active_instance = await self.instance_repo.get_with_plan(
                user.active_plan_instance_id
            )

        plans = await self.plan_repo.list_catalog()
        return CatalogView(plans=plans, active_plan_instance=active_instance)

    async def list_for_admin(self) -> list[Plan]:
        """All plans (admin view)."""
        return await self.plan_repo.list_catalog()

    async def plan_history(self, user_id: int) -> list[PlanInstance]:
        """
        All of a user's instances, newest first.

        Raises:
            NotFoundError: Unknown user
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found.")
        return await self.instance_repo.get_all_by_user(user_id)
