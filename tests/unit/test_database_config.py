"""
Unit tests for engine and session factory builders.
"""

import pytest
from sqlalchemy.pool import NullPool

from investplan.config import database


class TestEngineBuilders:
    """Engines are built on demand, never at import time."""

    def test_no_module_level_engine(self):
        """Importing the module opens no engine or session factory."""
        assert not hasattr(database, "engine")
        assert not hasattr(database, "async_session_maker")
        assert not hasattr(database, "get_session")

    @pytest.mark.asyncio
    async def test_null_pool_engine(self):
        """Worker engines use the requested pool class."""
        engine = database.create_engine_from_settings(
            "sqlite+aiosqlite://", poolclass=NullPool
        )
        try:
            assert isinstance(engine.pool, NullPool)
        finally:
            await engine.dispose()

    @pytest.mark.asyncio
    async def test_session_maker_keeps_loaded_state(self):
        """Sessions keep attributes loaded across commits."""
        engine = database.create_engine_from_settings("sqlite+aiosqlite://")
        try:
            maker = database.create_session_maker(engine)
            assert maker.kw["expire_on_commit"] is False
            assert maker.kw["autoflush"] is False
        finally:
            await engine.dispose()
