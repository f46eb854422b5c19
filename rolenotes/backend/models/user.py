"""
User Model.

Identity store table. Rows are written by the identity provider; the
notes service only reads them to resolve actors and attach owners.
"""

from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rolenotes.backend.core.utils import utc_now
from rolenotes.backend.models.base import Base, UUIDMixin

if TYPE_CHECKING:
    from rolenotes.backend.models.note import Note


class UserRole(StrEnum):
    """Roles recognized by the access rules."""

    MEMBER = "member"
    ADMIN = "admin"


class User(UUIDMixin, Base):
    """Registered user with a role claim."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "role IN ('member', 'admin')",
            name="ck_users_role",
        ),
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(320),
        unique=True,
        nullable=False,
    )
    role: Mapped[str] = mapped_column(
        String(20),
        default=UserRole.MEMBER.value,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        nullable=False,
    )

    notes: Mapped[list["Note"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r}, role={self.role!r})>"
