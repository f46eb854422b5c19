"""
Integration Test Fixtures.

Fixtures for integration tests - uses a real database and the full
FastAPI application. These build on the root conftest.py fixtures.
"""

from collections.abc import AsyncGenerator, Callable
from typing import Any
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from rolenotes.backend.core.database import get_db_session
from rolenotes.backend.core.security import create_access_token
from rolenotes.backend.models import User


@pytest.fixture
def _patched_settings(test_settings) -> Any:
    """Stub the secrets boundary; YAML settings are read from config/settings."""
    with patch("rolenotes.backend.core.security.get_settings", return_value=test_settings):
        yield test_settings


@pytest.fixture
async def client(
    db_session: AsyncSession,
    _patched_settings,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client whose requests share the test database session.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    from rolenotes.backend.main import create_app

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(_patched_settings) -> Callable[[User], dict[str, str]]:
    """
    Build bearer headers for a user.

    Usage:
        response = await client.get("/api/v1/notes", headers=auth_headers(member_one))
    """

    def _headers(user: User) -> dict[str, str]:
        token = create_access_token(data={"sub": user.id})
        return {"Authorization": f"Bearer {token}"}

    return _headers


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> dict[str, Any]:
        """Assert API response is successful and return its JSON body."""
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is True, f"Response not successful: {data}"
        return data

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """Assert API response is an error with the given status and code."""
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("error") is not None, f"Missing error details: {data}"

        if expected_code:
            actual_code = data["error"].get("code")
            assert actual_code == expected_code, (
                f"Expected error code {expected_code}, got {actual_code}"
            )

        return data

    @staticmethod
    def assert_validation_error(
        response: Any,
        field: str | None = None,
    ) -> dict[str, Any]:
        """Assert API response is a request validation error (422)."""
        data = ApiAssertions.assert_error(response, 422, "VAL_REQUEST_INVALID")

        if field:
            errors = data["error"].get("details", {}).get("validation_errors", [])
            fields = [e.get("field", "") for e in errors]
            assert any(field in f for f in fields), (
                f"Expected validation error for field '{field}', "
                f"got errors for: {fields}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
