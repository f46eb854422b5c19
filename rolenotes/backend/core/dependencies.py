"""
FastAPI Dependencies.

Shared dependencies for request handling: database session, request id
and the authenticated actor.
"""

import uuid
from typing import Annotated

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from rolenotes.backend.core.database import get_db_session
from rolenotes.backend.core.exceptions import AuthenticationError
from rolenotes.backend.core.logging import get_logger
from rolenotes.backend.core.permissions import Actor, ensure_admin
from rolenotes.backend.core.security import decode_token
from rolenotes.backend.repositories.user import UserRepository

logger = get_logger(__name__)

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]

_bearer_scheme = HTTPBearer(auto_error=False)


async def get_request_id(request: Request) -> str:
    """
    Request id for response metadata.

    Matches the X-Request-ID header set by RequestContextMiddleware.
    """
    return (
        getattr(request.state, "request_id", None)
        or request.headers.get("x-request-id")
        or str(uuid.uuid4())
    )


RequestId = Annotated[str, Depends(get_request_id)]


async def get_current_actor(
    db: DbSession,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> Actor:
    """
    Resolve the authenticated user from the bearer token.

    The role comes from the stored user row, not from token claims.

    Raises:
        AuthenticationError: If the token is missing, invalid, or its user is gone
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication required")

    payload = decode_token(credentials.credentials)
    user = await UserRepository(db).get_by_id_or_none(payload["sub"])
    if user is None:
        logger.warning("Token subject not found", extra={"user_id": payload["sub"]})
        raise AuthenticationError("Authentication required")

    structlog.contextvars.bind_contextvars(user_id=user.id, role=user.role)
    return Actor(id=user.id, role=user.role, name=user.name, email=user.email)


CurrentActor = Annotated[Actor, Depends(get_current_actor)]


async def require_admin(actor: CurrentActor) -> Actor:
    """
    Dependency for admin-only routes.

    Raises:
        AuthorizationError: If the actor is not an admin
    """
    ensure_admin(actor)
    return actor


AdminActor = Annotated[Actor, Depends(require_admin)]
