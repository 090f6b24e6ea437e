"""Periodic expiry of overdue plan instances."""

import dramatiq
from loguru import logger

from investplan.config.constants import (
    DRAMATIQ_TIME_LIMIT_SWEEP,
    EXPIRY_SWEEP_LOCK_KEY,
)
from investplan.config.settings import settings
from investplan.services.plan.expiry_sweeper import PlanExpirySweeper, SweepStats
from investplan.utils.distributed_lock import DistributedLock
from investplan.utils.redis_utils import get_redis_client
from jobs.async_runner import create_local_session, run_async


@dramatiq.actor(max_retries=3, time_limit=DRAMATIQ_TIME_LIMIT_SWEEP)
def sweep_expired_plan_instances(batch_size: int | None = None) -> None:
    """
    Expire active plan instances whose end date has passed.

    Safe to run concurrently with user operations: each instance is handled
    under its owner's plan lock.
    """
    logger.info("Starting plan expiry sweep...")

    stats = run_async(_sweep_async(batch_size))
    if stats is None:
        logger.info("Plan expiry sweep already running, skipped")
        return

    logger.info(
        f"Plan expiry sweep completed: expired={stats.expired}, "
        f"skipped={stats.skipped}, batches={stats.batches}"
    )


async def _sweep_async(batch_size: int | None) -> SweepStats | None:
    """Async implementation of the sweep task."""
    redis_client = None
    try:
        redis_client = await get_redis_client()
    except Exception as e:
        logger.warning(f"Failed to create Redis client for lock: {e}")

    lock = DistributedLock(redis_client=redis_client)

    try:
        async with lock.lock(
            EXPIRY_SWEEP_LOCK_KEY,
            timeout=DRAMATIQ_TIME_LIMIT_SWEEP // 1000,
            blocking=False,
        ) as acquired:
            if not acquired:
                return None

            async with create_local_session() as session:
                sweeper = PlanExpirySweeper(session, redis_client=redis_client)
                return await sweeper.sweep(
                    batch_size or settings.expiry_sweep_batch_size
                )
    finally:
        if redis_client:
            await redis_client.aclose()
