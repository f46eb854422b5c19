"""
Notes API Endpoints.

REST API endpoints for note management. Every route requires a bearer
token; restore and permanent delete additionally require the admin role.
"""

from uuid import UUID

from fastapi import APIRouter, Query

from rolenotes.backend.core.dependencies import (
    AdminActor,
    CurrentActor,
    DbSession,
    RequestId,
)
from rolenotes.backend.schemas.base import ApiResponse, ResponseMetadata
from rolenotes.backend.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from rolenotes.backend.services.note import NoteService

router = APIRouter()


def _respond(note, request_id: str) -> ApiResponse[NoteResponse]:
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Create a note",
    description="Create a new note owned by the authenticated user.",
)
async def create_note(
    data: NoteCreate,
    db: DbSession,
    actor: CurrentActor,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Create a new note."""
    note = await NoteService(db).create_note(data, actor)
    return _respond(note, request_id)


@router.get(
    "",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List notes",
    description=(
        "List notes visible to the caller, newest first. Members see their "
        "own notes, admins see all notes."
    ),
)
async def list_notes(
    db: DbSession,
    actor: CurrentActor,
    request_id: RequestId,
    include_deleted: bool = Query(
        default=False,
        description="Include soft-deleted notes",
    ),
) -> ApiResponse[list[NoteResponse]]:
    """List notes visible to the caller."""
    notes = await NoteService(db).list_notes(actor, include_deleted=include_deleted)
    return ApiResponse(
        data=[NoteResponse.model_validate(note) for note in notes],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Get a note",
    description="Get a single live note by ID.",
)
async def get_note(
    note_id: UUID,
    db: DbSession,
    actor: CurrentActor,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Get a note by ID."""
    note = await NoteService(db).get_note(str(note_id), actor)
    return _respond(note, request_id)


@router.patch(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Update a note",
    description="Update an existing note. Only provided fields are updated.",
)
async def update_note(
    note_id: UUID,
    data: NoteUpdate,
    db: DbSession,
    actor: CurrentActor,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Update a note."""
    note = await NoteService(db).update_note(str(note_id), data, actor)
    return _respond(note, request_id)


@router.delete(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Delete a note",
    description="Soft-delete a note. The row is kept and can be restored by an admin.",
)
async def delete_note(
    note_id: UUID,
    db: DbSession,
    actor: CurrentActor,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Soft-delete a note."""
    note = await NoteService(db).delete_note(str(note_id), actor)
    return _respond(note, request_id)


@router.post(
    "/{note_id}/restore",
    response_model=ApiResponse[NoteResponse],
    summary="Restore a note",
    description="Clear the deleted marker of a note (admin only).",
)
async def restore_note(
    note_id: UUID,
    db: DbSession,
    actor: AdminActor,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Restore a soft-deleted note."""
    note = await NoteService(db).restore_note(str(note_id), actor)
    return _respond(note, request_id)


@router.delete(
    "/{note_id}/permanent",
    response_model=ApiResponse[NoteResponse],
    summary="Permanently delete a note",
    description="Remove a note row for good (admin only).",
)
async def permanently_delete_note(
    note_id: UUID,
    db: DbSession,
    actor: AdminActor,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Permanently delete a note."""
    note = await NoteService(db).permanently_delete_note(str(note_id), actor)
    return _respond(note, request_id)
