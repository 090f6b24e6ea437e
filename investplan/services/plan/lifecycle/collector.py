"""
Daily profit collector.

Credits an active instance's daily profit once per cooldown window.
Expiry is evaluated lazily here; nothing else flags an overdue instance
except the optional sweep job.
"""

from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from investplan.config.settings import settings
from investplan.models.enums import TransactionType
from investplan.services.ledger import WALLET_BALANCE, credit
from investplan.services.plan.lifecycle.base import LifecycleStep
from investplan.services.plan.results import CollectionResult
from investplan.utils.datetime_utils import Clock, utc_now
from investplan.utils.exceptions import (
    CollectionTooSoonError,
    NotFoundError,
    PlanExpiredError,
    PreconditionFailedError,
)
from investplan.utils.formatters import format_hours, format_money


SECONDS_PER_HOUR = Decimal("3600")


class ProfitCollector(LifecycleStep):
    """Handles daily profit collection."""

    def __init__(
        self,
        session: AsyncSession,
        clock: Clock = utc_now,
        cooldown_hours: int | None = None,
    ) -> None:
        """
        Initialize collector.

        Args:
            session: Async database session
            clock: Wall clock
            cooldown_hours: Hours between collections (default from settings)
        """
        super().__init__(session, clock)
        self.cooldown = timedelta(
            hours=cooldown_hours or settings.collection_cooldown_hours
        )

    async def collect(self, user_id: int) -> CollectionResult:
        """
        Collect daily profit.

        Wall-clock based: a clock moved backwards lengthens the wait.

        Raises:
            NotFoundError: Unknown user or instance
            PreconditionFailedError: No active plan
            PlanExpiredError: Instance past end_date (expiry is committed)
            CollectionTooSoonError: Cooldown not elapsed
        """
        user = await self._lock_user(user_id)

        if not user.has_active_plan:
            raise PreconditionFailedError(
                "You do not have an active plan to collect profit from."
            )

        instance = await self.instance_repo.get_for_update(
            user.active_plan_instance_id
        )
        if instance is None:
            raise NotFoundError("Active plan instance not found.")

        now = self.clock()

        if instance.is_past_end(now):
            await self.instance_repo.mark_expired(instance)
            await self.user_repo.set_active_plan_instance(user, None)
            await self.session.commit()
            logger.info(
                "Plan instance expired on collection attempt",
                extra={
                    "user_id": user.id,
                    "instance_id": instance.id,
                    "end_date": instance.end_date.isoformat(),
                },
            )
            raise PlanExpiredError("This plan has already expired.")

        base = instance.last_collected_date or instance.start_date
        next_collection_at = base + self.cooldown

        if now < next_collection_at:
            remaining = Decimal(
                str((next_collection_at - now).total_seconds())
            ) / SECONDS_PER_HOUR
            remaining_hours = remaining.quantize(
                Decimal("0.1"), rounding=ROUND_HALF_UP
            )
            raise CollectionTooSoonError(
                "You already collected today. Try again in about "
                f"{format_hours(remaining_hours)} hours.",
                next_collection_at=next_collection_at,
                remaining_hours=remaining_hours,
            )

        profit = instance.daily_profit

        credit(user, WALLET_BALANCE, profit)
        instance.last_collected_date = now
        instance.total_collected = instance.total_collected + profit

        await self.instance_repo.save(instance)
        await self.user_repo.save(user)

        await self.transaction_repo.record(
            user_id=user.id,
            type=TransactionType.COLLECTION,
            amount=profit,
            description="Daily yield collection",
            plan_instance_id=instance.id,
        )

        logger.info(
            "Daily profit collected",
            extra={
                "user_id": user.id,
                "instance_id": instance.id,
                "profit": str(profit),
                "total_collected": str(instance.total_collected),
            },
        )

        return CollectionResult(
            user=user,
            instance=instance,
            profit=profit,
            message=f"You collected {format_money(profit)} successfully.",
        )
