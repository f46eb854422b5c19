"""
Unit Tests for Exception Handlers.

Mounts throwaway routes on a bare FastAPI app and checks the error
envelope and status code each exception maps to.
"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from rolenotes.backend.core.exception_handlers import register_exception_handlers
from rolenotes.backend.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)


class _Payload(BaseModel):
    title: str


@pytest.fixture
async def client():
    app = FastAPI()
    register_exception_handlers(app)

    errors = {
        "not-found": NotFoundError("Note not found"),
        "forbidden": AuthorizationError("Only admins can restore notes"),
        "unauthorized": AuthenticationError(),
        "conflict": ConflictError(),
        "database": DatabaseError(),
        "invalid": ValidationError("title too short", details={"title": "Minimum length is 1"}),
    }

    @app.get("/raise/{kind}")
    async def _raise(kind: str):
        raise errors[kind]

    @app.get("/crash")
    async def _crash():
        raise RuntimeError("boom")

    @app.post("/payload")
    async def _payload(data: _Payload):
        return data

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as test_client:
        yield test_client


class TestApplicationErrorHandler:
    """Tests for ApplicationError mapping."""

    @pytest.mark.parametrize(
        ("kind", "status", "code"),
        [
            ("not-found", 404, "RES_NOT_FOUND"),
            ("forbidden", 403, "AUTHZ_FORBIDDEN"),
            ("unauthorized", 401, "AUTH_UNAUTHORIZED"),
            ("conflict", 409, "RES_CONFLICT"),
            ("database", 503, "SYS_DATABASE_ERROR"),
            ("invalid", 400, "VAL_VALIDATION_ERROR"),
        ],
    )
    async def test_status_and_code(self, client, kind, status, code):
        response = await client.get(f"/raise/{kind}")

        assert response.status_code == status
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == code

    async def test_unauthorized_sets_bearer_challenge(self, client):
        response = await client.get("/raise/unauthorized")

        assert response.headers["www-authenticate"] == "Bearer"

    async def test_validation_details_are_exposed(self, client):
        response = await client.get("/raise/invalid")

        assert response.json()["error"]["details"] == {"title": "Minimum length is 1"}

    async def test_request_id_header_is_echoed_in_metadata(self, client):
        response = await client.get("/raise/not-found", headers={"X-Request-ID": "req-42"})

        assert response.json()["metadata"]["request_id"] == "req-42"


class TestRequestValidationHandler:
    """Tests for request body validation failures."""

    async def test_lists_failing_fields(self, client):
        response = await client.post("/payload", json={})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "VAL_REQUEST_INVALID"
        fields = [e["field"] for e in error["details"]["validation_errors"]]
        assert "body.title" in fields


class TestUnhandledExceptionHandler:
    """Tests for the catch-all handler."""

    async def test_hides_internal_details(self, client):
        response = await client.get("/crash")

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "SYS_INTERNAL_ERROR"
        assert "boom" not in response.text
