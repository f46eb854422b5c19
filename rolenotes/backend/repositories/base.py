"""
Base Repository.

Generic data access for models with a string ``id`` primary key.
Repositories flush but never commit; the request-scoped session owns the
transaction.
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rolenotes.backend.core.exceptions import NotFoundError
from rolenotes.backend.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    CRUD over one model class. Subclasses only name the model:

        class UserRepository(BaseRepository[User]):
            model = User
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, id: str | UUID) -> ModelType:
        """
        Raises:
            NotFoundError: If no row has this id
        """
        instance = await self.get_by_id_or_none(id)
        if instance is None:
            raise NotFoundError(f"{self.model.__name__} not found")
        return instance

    async def get_by_id_or_none(self, id: str | UUID) -> ModelType | None:
        result = await self.session.execute(
            select(self.model).where(self.model.id == str(id))
        )
        return result.scalar_one_or_none()

    async def create(self, **values: Any) -> ModelType:
        """Insert a row and return it with server defaults loaded."""
        instance = self.model(**values)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, instance: ModelType, **values: Any) -> ModelType:
        """Set the given mapped attributes on a loaded row in one UPDATE."""
        for key, value in values.items():
            if hasattr(instance, key):
                setattr(instance, key, value)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, instance: ModelType) -> None:
        await self.session.delete(instance)
        await self.session.flush()

    async def exists(self, id: str | UUID) -> bool:
        result = await self.session.execute(
            select(self.model.id).where(self.model.id == str(id))
        )
        return result.scalar_one_or_none() is not None
