"""
User repository.

Data access layer for User model.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from investplan.models.user import User
from investplan.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """User repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user repository."""
        super().__init__(User, session)

    async def set_active_plan_instance(
        self, user: User, instance_id: int | None
    ) -> None:
        """
        Point user at an active instance, or clear it with None.

        Args:
            user: Loaded user (locked by caller)
            instance_id: Instance ID or None
        """
        user.active_plan_instance_id = instance_id
        await self.save(user)
