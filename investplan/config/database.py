"""
Database configuration.

Engine and session factory builders. Callers own the engine they
create: workers build one per task, migrations build their own.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import Pool

from investplan.config.settings import settings


def create_engine_from_settings(
    url: str | None = None, poolclass: type[Pool] | None = None
) -> AsyncEngine:
    """
    Create async engine.

    Args:
        url: Optional database URL override (defaults to settings)
        poolclass: Optional pool class (NullPool for worker threads)

    Returns:
        Configured AsyncEngine
    """
    database_url = url or settings.database_url

    if poolclass is not None:
        return create_async_engine(
            database_url, echo=settings.database_echo, poolclass=poolclass
        )

    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=settings.database_echo)

    return create_async_engine(
        database_url,
        echo=settings.database_echo,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        pool_recycle=300,
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory bound to engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

