"""
GlobalSettings repository.

Data access layer for the platform configuration row.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from investplan.config.constants import MAIN_SETTINGS_KEY
from investplan.models.global_settings import GlobalSettings
from investplan.repositories.base import BaseRepository


class GlobalSettingsRepository(BaseRepository[GlobalSettings]):
    """Repository for global settings."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize global settings repository."""
        super().__init__(GlobalSettings, session)

    async def get_settings(
        self, config_key: str = MAIN_SETTINGS_KEY
    ) -> GlobalSettings | None:
        """
        Get settings row.

        Args:
            config_key: Row key (default "main_settings")

        Returns:
            Settings or None if the row does not exist
        """
        rows = await self.find_all(limit=1, config_key=config_key)
        return rows[0] if rows else None
