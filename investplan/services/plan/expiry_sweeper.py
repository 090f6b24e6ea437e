"""
Plan expiry sweeper.

Flips overdue active instances to expired and clears their owners'
active-instance reference. Optional: profit collection checks expiry on its
own, the sweep only keeps idle accounts tidy.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from investplan.config.constants import USER_PLAN_LOCK_KEY
from investplan.config.settings import settings
from investplan.repositories.plan_instance_repository import (
    PlanInstanceRepository,
)
from investplan.repositories.user_repository import UserRepository
from investplan.services.base_service import BaseService
from investplan.utils.datetime_utils import Clock, utc_now
from investplan.utils.distributed_lock import get_distributed_lock


@dataclass
class SweepStats:
    """Sweep counters."""

    expired: int = 0
    skipped: int = 0
    batches: int = 0


class PlanExpirySweeper(BaseService):
    """Batch expiry of overdue plan instances."""

    def __init__(
        self,
        session: AsyncSession,
        redis_client: Any | None = None,
        clock: Clock = utc_now,
    ) -> None:
        """
        Initialize sweeper.

        Args:
            session: Async database session
            redis_client: Optional Redis client for per-user locks
            clock: Wall clock
        """
        super().__init__(session)
        self.redis_client = redis_client
        self.clock = clock
        self.instance_repo = PlanInstanceRepository(session)
        self.user_repo = UserRepository(session)

    async def sweep(self, batch_size: int | None = None) -> SweepStats:
        """
        Expire every overdue active instance.

        Users busy with another plan operation are skipped and picked up
        by the next run.

        Args:
            batch_size: Instances per batch (default from settings)

        Returns:
            SweepStats
        """
        batch_size = batch_size or settings.expiry_sweep_batch_size
        stats = SweepStats()
        lock = get_distributed_lock(redis_client=self.redis_client)
        seen: set[int] = set()

        while True:
            now = self.clock()
            batch = [
                instance
                for instance in await self.instance_repo.get_overdue_active(
                    now, batch_size + len(seen)
                )
                if instance.id not in seen
            ][:batch_size]
            # Ends the read transaction before taking user locks
            await self.session.commit()

            if not batch:
                break
            stats.batches += 1

            for candidate in batch:
                seen.add(candidate.id)
                lock_key = USER_PLAN_LOCK_KEY.format(user_id=candidate.user_id)
                async with lock.lock(
                    lock_key,
                    timeout=settings.plan_lock_timeout,
                    blocking=False,
                ) as acquired:
                    if not acquired:
                        stats.skipped += 1
                        continue
                    if await self._expire_one(candidate.user_id, candidate.id, now):
                        stats.expired += 1

            if len(batch) < batch_size:
                break

        self.logger.info(
            "Plan expiry sweep finished",
            extra={
                "expired": stats.expired,
                "skipped": stats.skipped,
                "batches": stats.batches,
            },
        )
        return stats

    async def _expire_one(
        self, user_id: int, instance_id: int, now: datetime
    ) -> bool:
        """Expire one instance under the user's lock."""
        try:
            user = await self.user_repo.get_for_update(user_id)
            instance = await self.instance_repo.get_for_update(instance_id)

            if instance is None or not instance.is_active or not instance.is_past_end(now):
                await self.session.commit()
                return False

            await self.instance_repo.mark_expired(instance)
            if user is not None and user.active_plan_instance_id == instance.id:
                await self.user_repo.set_active_plan_instance(user, None)

            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        self.logger.debug(
            "Plan instance expired by sweep",
            extra={"user_id": user_id, "instance_id": instance_id},
        )
        return True
