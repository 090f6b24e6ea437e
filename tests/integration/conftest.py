"""
Fixtures for integration tests.

Each test gets its own SQLite database file (aiosqlite) with the full
schema, a session factory configured like production, a controllable
clock and small factories for users, plans and the settings row.
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from investplan.config.database import create_engine_from_settings, create_session_maker
from investplan.models import Base, GlobalSettings, Plan, User
from investplan.models.enums import YieldType


class FakeClock:
    """Wall clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
async def db_engine(tmp_path):
    """Engine bound to a fresh SQLite file with all tables created."""
    engine = create_engine_from_settings(
        f"sqlite+aiosqlite:///{tmp_path / 'investplan.db'}"
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine):
    """Session factory (expire_on_commit=False, like production)."""
    return create_session_maker(db_engine)


@pytest.fixture
async def session(session_maker):
    """Session used by the service under test."""
    async with session_maker() as session:
        yield session


@pytest.fixture
def clock():
    """Clock starting at 2026-01-01 09:00 UTC."""
    return FakeClock(datetime(2026, 1, 1, 9, 0, tzinfo=UTC))


@pytest.fixture
def make_user(session_maker):
    """Create a committed user and return its id."""

    async def _make_user(
        wallet: str = "0",
        bonus: str = "0",
        invited_by_id: int | None = None,
        username: str | None = None,
    ) -> int:
        async with session_maker() as s:
            user = User(
                username=username,
                wallet_balance=Decimal(wallet),
                bonus_balance=Decimal(bonus),
                invited_by_id=invited_by_id,
            )
            s.add(user)
            await s.commit()
            return user.id

    return _make_user


@pytest.fixture
def make_plan(session_maker):
    """Create a committed catalog plan and return its id."""

    async def _make_plan(
        name: str = "Starter",
        min_amount: str = "500",
        max_amount: str = "5000",
        yield_type: YieldType = YieldType.PERCENTAGE,
        yield_value: str = "2",
        duration_days: int = 30,
    ) -> int:
        async with session_maker() as s:
            plan = Plan(
                name=name,
                min_amount=Decimal(min_amount),
                max_amount=Decimal(max_amount),
                daily_yield_type=yield_type.value,
                daily_yield_value=Decimal(yield_value),
                duration_days=duration_days,
            )
            s.add(plan)
            await s.commit()
            return plan.id

    return _make_plan


@pytest.fixture
def make_settings(session_maker):
    """Create the main_settings row."""

    async def _make_settings(referral: str = "10", daily: str = "5") -> None:
        async with session_maker() as s:
            s.add(
                GlobalSettings(
                    referral_commission_rate=Decimal(referral),
                    daily_commission_rate=Decimal(daily),
                )
            )
            await s.commit()

    return _make_settings


@pytest.fixture
def fetch(session_maker):
    """Load a fresh copy of a row in a new session."""

    async def _fetch(model, id):
        async with session_maker() as s:
            return await s.get(model, id)

    return _fetch
