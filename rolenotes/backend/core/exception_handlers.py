"""
Exception Handlers.

Turns every error leaving a route into the ErrorResponse envelope:

    ApplicationError        -> status from EXCEPTION_STATUS_MAP, its own code
    RequestValidationError  -> 422 VAL_REQUEST_INVALID with per-field details
    anything else           -> 500 SYS_INTERNAL_ERROR, details only in the log

Usage:
    from rolenotes.backend.core.exception_handlers import register_exception_handlers

    register_exception_handlers(app)
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from rolenotes.backend.core.exceptions import (
    ApplicationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from rolenotes.backend.core.logging import get_logger
from rolenotes.backend.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata

logger = get_logger(__name__)

EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    ValidationError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    NotFoundError: 404,
    ConflictError: 409,
    DatabaseError: 503,
}


def _get_request_id(request: Request) -> str | None:
    """Request id set by RequestContextMiddleware, else the raw header."""
    return getattr(request.state, "request_id", None) or request.headers.get("x-request-id")


def _error_response(
    request: Request,
    status_code: int,
    detail: ErrorDetail,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=detail,
        metadata=ResponseMetadata(request_id=_get_request_id(request)),
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


def _request_context(request: Request) -> dict[str, Any]:
    return {
        "path": request.url.path,
        "method": request.method,
        "request_id": _get_request_id(request),
    }


async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    """
    Handle ApplicationError and its subclasses.

    401 responses carry a Bearer challenge. ValidationError details are
    passed through to the caller.
    """
    status_code = EXCEPTION_STATUS_MAP.get(type(exc), 500)

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Server error" if status_code >= 500 else "Client error",
        extra={
            "code": exc.code,
            "message": exc.message,
            "status": status_code,
            **_request_context(request),
        },
    )

    detail = ErrorDetail(code=exc.code, message=exc.message)
    if isinstance(exc, ValidationError) and exc.details:
        detail.details = exc.details

    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return _error_response(request, status_code, detail, headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle rejected path params, query params and bodies."""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", "Validation error"),
            "type": err.get("type", "unknown"),
        }
        for err in exc.errors()
    ]

    logger.warning(
        "Request validation failed",
        extra={
            "fields": [e["field"] for e in errors],
            **_request_context(request),
        },
    )

    detail = ErrorDetail(
        code="VAL_REQUEST_INVALID",
        message="Request validation failed",
        details={"validation_errors": errors},
    )
    return _error_response(request, 422, detail)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log with traceback, answer with a generic 500."""
    logger.exception(
        "Unhandled exception",
        extra={"exception_type": type(exc).__name__, **_request_context(request)},
    )

    detail = ErrorDetail(code="SYS_INTERNAL_ERROR", message="An unexpected error occurred")
    return _error_response(request, 500, detail)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all handlers to ``app``."""
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
