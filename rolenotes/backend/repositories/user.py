"""
User Repository.

Read access to the identity store, used to resolve actors from tokens.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rolenotes.backend.models.user import User
from rolenotes.backend.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model."""

    model = User

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email address, or None."""
        result = await self.session.execute(
            select(User).where(User.email == email)
        )
        return result.scalar_one_or_none()
