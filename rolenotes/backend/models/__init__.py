# SQLAlchemy models package
from rolenotes.backend.models.base import Base
from rolenotes.backend.models.note import Note, NoteStatus
from rolenotes.backend.models.user import User, UserRole

__all__ = [
    "Base",
    "Note",
    "NoteStatus",
    "User",
    "UserRole",
]
