"""
Catalog admin manager.

Create, update and delete plan tiers. Updates go through an allow-list of
mutable fields and the merged terms are validated before persisting.
Existing instances keep their frozen daily_profit whatever happens here.
"""

from typing import Any

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from investplan.models.enums import PlanStatus
from investplan.models.plan import Plan
from investplan.repositories.plan_instance_repository import (
    PlanInstanceRepository,
)
from investplan.repositories.plan_repository import PlanRepository
from investplan.utils.exceptions import NotFoundError, PlanInUseError
from investplan.validators.plan import (
    REQUIRED_PLAN_FIELDS,
    validate_plan_fields,
    validate_plan_terms,
)


class PlanAdminManager:
    """Catalog CRUD for admins."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize admin manager."""
        self.session = session
        self.plan_repo = PlanRepository(session)
        self.instance_repo = PlanInstanceRepository(session)

    async def create_plan(self, data: dict[str, Any]) -> Plan:
        """
        Create a catalog entry.

        Args:
            data: name, min_amount, max_amount, daily_yield_type,
                daily_yield_value, duration_days; optional image_url,
                hash_rate

        Raises:
            InvalidPlanDataError: Missing, unknown or invalid fields
        """
        fields = validate_plan_fields(data, require_all=True)
        validate_plan_terms(fields)

        fields.setdefault("image_url", "")
        plan = await self.plan_repo.create(**fields)

        logger.info(
            "Plan created",
            extra={"plan_id": plan.id, "plan_name": plan.name},
        )
        return plan

    async def update_plan(self, plan_id: int, data: dict[str, Any]) -> Plan:
        """
        Merge allowed fields into an existing plan.

        Raises:
            NotFoundError: Unknown plan
            InvalidPlanDataError: Unknown or invalid fields, or the merged
                terms are inconsistent
        """
        plan = await self.plan_repo.get_by_id(plan_id)
        if plan is None:
            raise NotFoundError("Plan not found.")

        changes = validate_plan_fields(data)

        merged = {field: getattr(plan, field) for field in REQUIRED_PLAN_FIELDS}
        merged.update(
            {k: v for k, v in changes.items() if k in REQUIRED_PLAN_FIELDS}
        )
        validate_plan_terms(merged)

        for field, value in changes.items():
            setattr(plan, field, value)
        await self.plan_repo.save(plan)

        logger.info(
            "Plan updated",
            extra={"plan_id": plan.id, "fields": sorted(changes)},
        )
        return plan

    async def delete_plan(self, plan_id: int) -> None:
        """
        Delete a catalog entry with no active holders.

        Raises:
            NotFoundError: Unknown plan
            PlanInUseError: At least one active instance references it
        """
        plan = await self.plan_repo.get_by_id(plan_id)
        if plan is None:
            raise NotFoundError("Plan not found.")

        active_instances = await self.instance_repo.count_by_plan_and_status(
            plan.id, PlanStatus.ACTIVE
        )
        if active_instances > 0:
            raise PlanInUseError(
                "This plan cannot be deleted because "
                f"{active_instances} user(s) have it active.",
                active_instances=active_instances,
            )

        await self.plan_repo.delete(plan.id)
        self.session.expunge(plan)

        logger.info(
            "Plan deleted",
            extra={"plan_id": plan_id, "plan_name": plan.name},
        )
