"""
Note Repository.

Data access layer for notes. Every read of live notes goes through the
``Note.is_live`` predicate so soft-deleted rows are filtered the same way
everywhere. The owning user is loaded alongside each note.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rolenotes.backend.core.utils import utc_now
from rolenotes.backend.models.note import Note
from rolenotes.backend.repositories.base import BaseRepository


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits standard CRUD operations from BaseRepository
    and adds ownership and soft-delete aware queries.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def list_visible(
        self,
        owner_id: str | None = None,
        include_deleted: bool = False,
    ) -> list[Note]:
        """
        List notes, newest first.

        Args:
            owner_id: Restrict to notes owned by this user (None for all owners)
            include_deleted: Whether soft-deleted notes are included

        Returns:
            List of matching notes, possibly empty
        """
        query = select(Note)

        if not include_deleted:
            query = query.where(Note.is_live)
        if owner_id is not None:
            query = query.where(Note.user_id == owner_id)

        result = await self.session.execute(
            query.order_by(Note.created_at.desc(), Note.id.desc())
        )
        return list(result.scalars().all())

    async def get_live(self, id: str) -> Note | None:
        """Get a note by ID unless it is soft-deleted."""
        result = await self.session.execute(
            select(Note).where(Note.id == str(id)).where(Note.is_live)
        )
        return result.scalar_one_or_none()

    async def get_any(self, id: str) -> Note | None:
        """Get a note by ID whether or not it is soft-deleted."""
        return await self.get_by_id_or_none(id)

    async def soft_delete(self, note: Note) -> Note:
        """Mark a note as deleted without removing the row."""
        return await self.update(note, deleted_at=utc_now())

    async def clear_deleted(self, note: Note) -> Note:
        """Clear the deleted marker. A live note is left unchanged."""
        if note.deleted_at is None:
            return note
        return await self.update(note, deleted_at=None)

    async def purge(self, note: Note) -> Note:
        """Physically remove a note row and return its last known state."""
        await self.delete(note)
        return note
