"""
Note Schemas.

Pydantic schemas for note API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rolenotes.backend.models.note import TITLE_MAX_LENGTH, NoteStatus


class NoteCreate(BaseModel):
    """
    Schema for creating a new note.

    Ownership, ids and timestamps are assigned by the server; any such
    fields in the request body are ignored.
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="Note title",
        examples=["Shopping list"],
    )
    content: str | None = Field(
        default=None,
        description="Note content",
        examples=["Milk, eggs, bread"],
    )
    status: NoteStatus = Field(
        default=NoteStatus.ACTIVE,
        description="Note status",
    )

    model_config = ConfigDict(extra="ignore")


class NoteUpdate(BaseModel):
    """Schema for updating an existing note. Only provided fields are applied."""

    title: str | None = Field(
        default=None,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="Note title",
    )
    content: str | None = Field(
        default=None,
        description="Note content",
    )
    status: NoteStatus | None = Field(
        default=None,
        description="Note status",
    )

    model_config = ConfigDict(extra="ignore")

    @field_validator("title", "status", mode="before")
    @classmethod
    def _reject_explicit_null(cls, value: object) -> object:
        # Defaults are not validated, so this only fires on an explicit null.
        if value is None:
            raise ValueError("Field may be omitted but not set to null")
        return value


class NoteOwner(BaseModel):
    """Owner summary attached to notes."""

    id: str
    name: str
    email: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class NoteResponse(BaseModel):
    """Schema for note in API responses."""

    id: str = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str | None = Field(description="Note content")
    status: NoteStatus = Field(description="Note status")
    user_id: str = Field(description="Owner identifier")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime | None = Field(description="Last update timestamp")
    deleted_at: datetime | None = Field(description="Soft deletion timestamp")
    owner: NoteOwner | None = Field(
        default=None,
        validation_alias="user",
        description="Owner summary",
    )

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
