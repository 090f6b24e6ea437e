"""
Shared plumbing for lifecycle steps.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from investplan.models.enums import PlanStatus, TransactionType
from investplan.models.plan import Plan
from investplan.models.plan_instance import PlanInstance
from investplan.models.user import User
from investplan.repositories.plan_instance_repository import (
    PlanInstanceRepository,
)
from investplan.repositories.plan_repository import PlanRepository
from investplan.repositories.transaction_repository import TransactionRepository
from investplan.repositories.user_repository import UserRepository
from investplan.services.plan.yield_calculator import (
    calculate_daily_profit,
    calculate_end_date,
)
from investplan.utils.datetime_utils import Clock, utc_now
from investplan.utils.exceptions import NotFoundError


class LifecycleStep:
    """
    Base for lifecycle operations.

    Steps validate, mutate and flush. They never commit: the PlanService
    facade owns the transaction (lazy expiry in the collector is the one
    exception).
    """

    def __init__(self, session: AsyncSession, clock: Clock = utc_now) -> None:
        """
        Initialize step.

        Args:
            session: Async database session
            clock: Wall clock returning aware UTC datetimes
        """
        self.session = session
        self.clock = clock
        self.user_repo = UserRepository(session)
        self.plan_repo = PlanRepository(session)
        self.instance_repo = PlanInstanceRepository(session)
        self.transaction_repo = TransactionRepository(session)

    async def _lock_user(self, user_id: int) -> User:
        """Load user with a row lock."""
        user = await self.user_repo.get_for_update(user_id)
        if user is None:
            raise NotFoundError("User not found.")
        return user

    async def _get_plan(self, plan_id: int | None, message: str) -> Plan:
        plan = await self.plan_repo.get_by_id(plan_id) if plan_id is not None else None
        if plan is None:
            raise NotFoundError(message)
        return plan

    async def _open_instance(
        self,
        user: User,
        plan: Plan,
        invested_amount: Decimal,
        now: datetime,
    ) -> PlanInstance:
        """
        Create an active instance and point the user at it.

        daily_profit is frozen here from the plan's current yield fields.
        """
        instance = await self.instance_repo.create(
            user_id=user.id,
            plan_id=plan.id,
            invested_amount=invested_amount,
            daily_profit=calculate_daily_profit(plan, invested_amount),
            start_date=now,
            end_date=calculate_end_date(now, plan.duration_days),
            last_collected_date=now,
            total_collected=Decimal("0"),
            status=PlanStatus.ACTIVE.value,
        )
        await self.user_repo.set_active_plan_instance(user, instance.id)
        return instance

    async def _record_investment(
        self,
        user: User,
        amount: Decimal,
        description: str,
        instance: PlanInstance,
    ) -> None:
        """Ledger a wallet debit for an investment (amount >= 0)."""
        await self.transaction_repo.record(
            user_id=user.id,
            type=TransactionType.INVESTMENT,
            amount=-amount,
            description=description,
            plan_instance_id=instance.id,
        )
