"""
Base Service.

Shared plumbing for services: the session, a module logger, and the
translation of SQLAlchemy failures into application errors so that no
driver exception reaches the HTTP layer.

Usage:
    class NoteService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.repo = NoteRepository(session)
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rolenotes.backend.core.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from rolenotes.backend.core.logging import get_logger

T = TypeVar("T")


class BaseService:
    """Base class for services working on one AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def _execute_db_operation(self, operation: str, coro: Awaitable[T]) -> T:
        """
        Await a storage call, converting SQLAlchemy errors.

        Raises:
            ConflictError: On a unique constraint violation
            DatabaseError: On any other constraint violation or driver error
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Database integrity error",
                extra={"operation": operation, "error": str(e.orig)},
            )
            if "unique" in str(e).lower() or "duplicate" in str(e).lower():
                raise ConflictError("Resource already exists") from e
            raise DatabaseError(f"Database constraint violation: {operation}") from e
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(f"Database operation failed: {operation}") from e

    @staticmethod
    def _found(instance: T | None, message: str) -> T:
        """Return instance, or raise NotFoundError when it is None."""
        if instance is None:
            raise NotFoundError(message)
        return instance

    @staticmethod
    def _validate_string_length(
        value: str,
        field_name: str,
        min_length: int | None = None,
        max_length: int | None = None,
    ) -> None:
        """
        Raises:
            ValidationError: If len(value) is outside [min_length, max_length]
        """
        if min_length is not None and len(value) < min_length:
            raise ValidationError(
                f"{field_name} too short",
                details={field_name: f"Minimum length is {min_length}"},
            )
        if max_length is not None and len(value) > max_length:
            raise ValidationError(
                f"{field_name} too long",
                details={field_name: f"Maximum length is {max_length}"},
            )

    def _log_operation(self, operation: str, **context: Any) -> None:
        self._logger.info(operation, extra={"service": type(self).__name__, **context})

    def _log_debug(self, message: str, **context: Any) -> None:
        self._logger.debug(message, extra={"service": type(self).__name__, **context})
