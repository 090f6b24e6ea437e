"""
Distributed lock.

Serializes operations per key. Uses Redis (SET NX PX with a random token)
when a client is available, otherwise an in-process asyncio.Lock registry,
which is only correct for a single worker process.
"""

import asyncio
import secrets
import time
import weakref
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from loguru import logger


# Compare-and-delete so a lock is only released by its owner
_RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
else
    return 0
end
"""

_REDIS_POLL_INTERVAL = 0.05

# (loop id, key) -> lock; entries vanish once nobody holds or waits on them
_local_locks: "weakref.WeakValueDictionary[tuple[int, str], asyncio.Lock]" = (
    weakref.WeakValueDictionary()
)


def _get_local_lock(key: str) -> asyncio.Lock:
    registry_key = (id(asyncio.get_running_loop()), key)
    lock = _local_locks.get(registry_key)
    if lock is None:
        lock = asyncio.Lock()
        _local_locks[registry_key] = lock
    return lock


class DistributedLock:
    """
    Lock keyed by name.

    Usage:
        lock = DistributedLock(redis_client=redis_client)
        async with lock.lock("user:1:plan_operation") as acquired:
            if not acquired:
                ...
    """

    def __init__(self, redis_client: Any | None = None) -> None:
        """
        Initialize lock.

        Args:
            redis_client: Optional redis.asyncio client
        """
        self.redis_client = redis_client

    @asynccontextmanager
    async def lock(
        self,
        key: str,
        timeout: int = 30,
        blocking: bool = True,
        blocking_timeout: float = 5.0,
    ) -> AsyncIterator[bool]:
        """
        Acquire lock for the duration of the context.

        Args:
            key: Lock name
            timeout: Lock TTL in seconds (Redis only)
            blocking: Wait for the lock if it is taken
            blocking_timeout: Max seconds to wait

        Yields:
            True if the lock was acquired, False otherwise
        """
        if self.redis_client is not None:
            async with self._redis_lock(
                key, timeout, blocking, blocking_timeout
            ) as acquired:
                yield acquired
            return

        async with self._local_lock(key, blocking, blocking_timeout) as acquired:
            yield acquired

    @asynccontextmanager
    async def _local_lock(
        self, key: str, blocking: bool, blocking_timeout: float
    ) -> AsyncIterator[bool]:
        lock = _get_local_lock(key)

        if not blocking and lock.locked():
            yield False
            return

        try:
            await asyncio.wait_for(lock.acquire(), timeout=blocking_timeout)
        except TimeoutError:
            logger.warning(f"Timed out waiting for local lock {key}")
            yield False
            return

        try:
            yield True
        finally:
            lock.release()

    @asynccontextmanager
    async def _redis_lock(
        self,
        key: str,
        timeout: int,
        blocking: bool,
        blocking_timeout: float,
    ) -> AsyncIterator[bool]:
        token = secrets.token_hex(16)
        lock_key = f"lock:{key}"
        deadline = time.monotonic() + blocking_timeout
        acquired = False

        while True:
            acquired = bool(
                await self.redis_client.set(
                    lock_key, token, nx=True, px=timeout * 1000
                )
            )
            if acquired or not blocking or time.monotonic() >= deadline:
                break
            await asyncio.sleep(_REDIS_POLL_INTERVAL)

        if not acquired:
            logger.warning(f"Could not acquire redis lock {lock_key}")
            yield False
            return

        try:
            yield True
        finally:
            try:
                await self.redis_client.eval(_RELEASE_SCRIPT, 1, lock_key, token)
            except Exception as e:
                # TTL expires the key anyway
                logger.error(f"Failed to release redis lock {lock_key}: {e}")


def get_distributed_lock(redis_client: Any | None = None) -> DistributedLock:
    """Create lock backed by Redis when a client is given."""
    return DistributedLock(redis_client=redis_client)
