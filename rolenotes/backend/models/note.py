"""
Note Model.

Database model for personal notes with ownership and soft deletion.
"""

from enum import StrEnum

from sqlalchemy import CheckConstraint, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rolenotes.backend.models.base import Base, SoftDeleteMixin, TimestampMixin, UUIDMixin
from rolenotes.backend.models.user import User

TITLE_MAX_LENGTH = 256


class NoteStatus(StrEnum):
    """Lifecycle status of a note, independent of soft deletion."""

    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


class Note(UUIDMixin, TimestampMixin, SoftDeleteMixin, Base):
    """
    Note database model.

    Every note belongs to exactly one user. Deleting the user removes
    their notes through the foreign key cascade. A note with deleted_at
    set is soft-deleted and hidden from normal reads.
    """

    __tablename__ = "notes"
    __table_args__ = (
        CheckConstraint(
            "status IN ('draft', 'active', 'archived')",
            name="ck_notes_status",
        ),
        CheckConstraint(
            "length(title) >= 1",
            name="ck_notes_title_not_empty",
        ),
    )

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
    )
    content: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default=NoteStatus.ACTIVE.value,
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user: Mapped[User] = relationship(back_populates="notes", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, user_id={self.user_id})>"
