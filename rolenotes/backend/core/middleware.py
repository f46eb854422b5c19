"""
Request Context Middleware.

Gives every request an id, times it, and makes both visible in logs and
response headers:

    X-Request-ID     propagated from the caller or generated
    X-Response-Time  wall time spent in the app, e.g. "12ms"
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from rolenotes.backend.core.logging import get_logger

logger = get_logger(__name__)


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Bind request_id, method and path into structlog contextvars for the
    lifetime of the request, and store request_id on ``request.state`` for
    the exception handlers.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            source="api",
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed with exception",
                extra={"duration_ms": _elapsed_ms(started), "error_type": type(exc).__name__},
            )
            raise
        else:
            duration_ms = _elapsed_ms(started)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"
            logger.info(
                "Request completed",
                extra={"status_code": response.status_code, "duration_ms": duration_ms},
            )
            return response
        finally:
            # Context vars must not leak into the next request on this task
            structlog.contextvars.clear_contextvars()
