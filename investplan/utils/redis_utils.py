"""Redis connection utilities."""

import redis.asyncio as redis

from investplan.config.settings import settings


async def get_redis_client() -> redis.Redis:
    """
    Create a Redis client with settings from config.

    Returns:
        redis.Redis: Client with decode_responses=True. Caller closes it.
    """
    return redis.Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        password=settings.redis_password,
        db=settings.redis_db,
        decode_responses=True,
    )


def get_redis_url_masked() -> str:
    """Redis URL with the password masked, safe for logs."""
    auth = ":****@" if settings.redis_password else ""
    return (
        f"redis://{auth}{settings.redis_host}:{settings.redis_port}"
        f"/{settings.redis_db}"
    )
