"""
Note Service.

Business logic layer for notes. Every operation takes the acting user,
re-reads the current row, applies the access rules from
``core.permissions`` and only then touches storage.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from rolenotes.backend.core.permissions import Actor, ensure_admin, ensure_note_access
from rolenotes.backend.core.utils import utc_now
from rolenotes.backend.models.note import TITLE_MAX_LENGTH, Note
from rolenotes.backend.repositories.note import NoteRepository
from rolenotes.backend.schemas.note import NoteCreate, NoteUpdate
from rolenotes.backend.services.base import BaseService


class NoteService(BaseService):
    """
    Service for note business logic.

    Members only ever see and change their own notes; admins see and
    change everyone's, and are the only ones who can restore or purge
    soft-deleted notes.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)

    async def _get_live_note(self, note_id: str) -> Note:
        note = await self._execute_db_operation("get_live_note", self.repo.get_live(note_id))
        return self._found(note, "Note not found")

    async def _get_any_note(self, note_id: str) -> Note:
        note = await self._execute_db_operation("get_any_note", self.repo.get_any(note_id))
        return self._found(note, "Note not found")

    def _validate_title(self, title: str) -> None:
        self._validate_string_length(
            title,
            "title",
            min_length=1,
            max_length=TITLE_MAX_LENGTH,
        )

    async def create_note(self, data: NoteCreate, actor: Actor) -> Note:
        """
        Create a new note owned by the actor.

        Args:
            data: Note creation data
            actor: Authenticated user creating the note

        Returns:
            Created note

        Raises:
            ValidationError: If the title is empty or too long
        """
        self._validate_title(data.title)
        self._log_operation("Creating note", user_id=actor.id)

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(
                title=data.title,
                content=data.content,
                status=data.status.value,
                user_id=actor.id,
            ),
        )

        self._log_debug("Note created", note_id=note.id, user_id=actor.id)
        return note

    async def list_notes(
        self,
        actor: Actor,
        include_deleted: bool = False,
    ) -> list[Note]:
        """
        List notes visible to the actor, newest first.

        Admins get every note, members only their own.

        Args:
            actor: Authenticated user
            include_deleted: Whether soft-deleted notes are included

        Returns:
            List of notes, empty when nothing matches
        """
        owner_id = None if actor.is_admin else actor.id
        self._log_debug(
            "Listing notes",
            user_id=actor.id,
            role=actor.role,
            include_deleted=include_deleted,
        )
        return await self._execute_db_operation(
            "list_notes",
            self.repo.list_visible(owner_id=owner_id, include_deleted=include_deleted),
        )

    async def get_note(self, note_id: str, actor: Actor) -> Note:
        """
        Get a live note by ID.

        Raises:
            NotFoundError: If no live note has this ID
            AuthorizationError: If the actor is neither admin nor owner
        """
        note = await self._get_live_note(note_id)
        ensure_note_access(actor, note.user_id, action="view")
        return note

    async def update_note(
        self,
        note_id: str,
        data: NoteUpdate,
        actor: Actor,
    ) -> Note:
        """
        Update a live note.

        Only fields present in the request are applied; updated_at is
        stamped on every call.

        Raises:
            ValidationError: If a provided title is empty or too long
            NotFoundError: If no live note has this ID
            AuthorizationError: If the actor is neither admin nor owner
        """
        update_data = data.model_dump(exclude_unset=True, mode="json")
        if "title" in update_data:
            self._validate_title(update_data["title"])

        note = await self._get_live_note(note_id)
        ensure_note_access(actor, note.user_id, action="update")

        self._log_operation(
            "Updating note",
            note_id=note_id,
            user_id=actor.id,
            fields=list(update_data.keys()),
        )

        return await self._execute_db_operation(
            "update_note",
            self.repo.update(note, **update_data, updated_at=utc_now()),
        )

    async def delete_note(self, note_id: str, actor: Actor) -> Note:
        """
        Soft-delete a live note.

        An already deleted note is reported as not found.

        Raises:
            NotFoundError: If no live note has this ID
            AuthorizationError: If the actor is neither admin nor owner
        """
        note = await self._get_live_note(note_id)
        ensure_note_access(actor, note.user_id, action="delete")

        self._log_operation("Soft-deleting note", note_id=note_id, user_id=actor.id)

        return await self._execute_db_operation(
            "delete_note",
            self.repo.soft_delete(note),
        )

    async def restore_note(self, note_id: str, actor: Actor) -> Note:
        """
        Restore a note (admin only).

        Restoring a note that is not deleted succeeds and changes nothing.

        Raises:
            AuthorizationError: If the actor is not an admin
            NotFoundError: If no note has this ID at all
        """
        ensure_admin(actor, action="restore notes")

        note = await self._get_any_note(note_id)
        self._log_operation("Restoring note", note_id=note_id, user_id=actor.id)

        return await self._execute_db_operation(
            "restore_note",
            self.repo.clear_deleted(note),
        )

    async def permanently_delete_note(self, note_id: str, actor: Actor) -> Note:
        """
        Remove a note row for good (admin only).

        Works on live and soft-deleted notes alike.

        Returns:
            The removed note as it was before deletion

        Raises:
            AuthorizationError: If the actor is not an admin
            NotFoundError: If no note has this ID at all
        """
        ensure_admin(actor, action="permanently delete notes")

        note = await self._get_any_note(note_id)
        self._log_operation(
            "Permanently deleting note",
            note_id=note_id,
            owner_id=note.user_id,
            user_id=actor.id,
        )

        return await self._execute_db_operation(
            "permanently_delete_note",
            self.repo.purge(note),
        )
