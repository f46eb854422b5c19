"""
SQLAlchemy Base Model.

Base class for all database models with common fields and utilities.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from rolenotes.backend.core.utils import utc_now


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class TimestampMixin:
    """
    Mixin that adds created_at and updated_at timestamps.

    updated_at stays NULL until the first explicit update.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
    )


class SoftDeleteMixin:
    """
    Mixin that adds a deleted_at marker.

    A row is live while deleted_at is NULL. ``is_live`` works both on
    instances and as a SQL expression, so every read path filters with
    the same predicate:

        select(Note).where(Note.is_live)
    """

    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
        index=True,
    )

    @hybrid_property
    def is_live(self) -> bool:
        return self.deleted_at is None

    @is_live.inplace.expression
    @classmethod
    def _is_live_expression(cls):
        return cls.deleted_at.is_(None)


class UUIDMixin:
    """Mixin that adds a UUID primary key."""

    id: Mapped[str] = mapped_column(
        primary_key=True,
        default=lambda: str(uuid4()),
    )
