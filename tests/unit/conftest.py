"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from rolenotes.backend.core.permissions import Actor


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_repository(mock_db_session: AsyncMock):
            repo = NoteRepository(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    return session


@pytest.fixture
def admin() -> Actor:
    return Actor(id="admin-1", role="admin", name="Admin User", email="admin@example.com")


@pytest.fixture
def member() -> Actor:
    return Actor(id="member-1", role="member", name="Member One", email="member1@example.com")


@pytest.fixture
def other_member() -> Actor:
    return Actor(id="member-2", role="member", name="Member Two", email="member2@example.com")


@pytest.fixture
def make_note():
    """Factory for stand-in note rows."""

    def _make(note_id: str = "note-1", user_id: str = "member-1", deleted_at=None) -> MagicMock:
        note = MagicMock()
        note.id = note_id
        note.user_id = user_id
        note.deleted_at = deleted_at
        return note

    return _make
