"""
FastAPI Application Entry Point.

    uvicorn rolenotes.backend.main:app

``app`` is built on first attribute access so importing this module does
not read configuration.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rolenotes.backend.api import health
from rolenotes.backend.api.v1 import router as api_v1_router
from rolenotes.backend.core.config import get_app_config
from rolenotes.backend.core.database import dispose_engine
from rolenotes.backend.core.exception_handlers import register_exception_handlers
from rolenotes.backend.core.logging import get_logger, setup_logging
from rolenotes.backend.core.middleware import RequestContextMiddleware
from rolenotes.backend.core.startup_checks import run_startup_checks

logger = get_logger(__name__)

_app: FastAPI | None = None

OPENAPI_TAGS = [
    {
        "name": "notes",
        "description": (
            "Personal notes. Members work on their own notes, admins on all "
            "notes. Restore and permanent delete are admin only."
        ),
    },
    {"name": "health", "description": "Liveness and readiness probes."},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging, refuse to start on unsafe settings, release the pool on exit."""
    app_config = get_app_config()
    setup_logging()
    run_startup_checks()

    logger.info(
        "Application starting",
        extra={
            "app_name": app_config.application.name,
            "env": app_config.application.environment,
        },
    )
    yield

    await dispose_engine()
    logger.info("Application shutting down")


def _add_cors(app: FastAPI, origins: list[str]) -> None:
    if not origins:
        return
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID", "X-Response-Time"],
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = get_app_config().application

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        openapi_tags=OPENAPI_TAGS,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    _add_cors(app, app_settings.cors.origins)
    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=app_settings.api_prefix)

    return app


def get_app() -> FastAPI:
    """Return the process-wide application, creating it on first use."""
    global _app
    if _app is None:
        _app = create_app()
    return _app


def __getattr__(name: str) -> FastAPI:
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
