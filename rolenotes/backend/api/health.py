"""
Health Check Endpoints.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (database reachable)
"""

import asyncio
from typing import Any

from fastapi import APIRouter, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from rolenotes.backend.core.config import get_app_config
from rolenotes.backend.core.database import get_session_factory
from rolenotes.backend.core.logging import get_logger
from rolenotes.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)


async def check_database() -> dict[str, Any]:
    """
    Check database connectivity.

    Returns:
        Dict with status, latency, and optional error message
    """
    start = utc_now()
    try:
        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}

    latency_ms = int((utc_now() - start).total_seconds() * 1000)
    return {"status": "healthy", "latency_ms": latency_ms}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running. No dependency checks.
    """
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check() -> dict[str, Any]:
    """
    Readiness check.

    Returns 503 when the database cannot be reached in time.
    """
    timeout = get_app_config().application.health_checks.ready_timeout_seconds

    try:
        async with asyncio.timeout(timeout):
            db_result = await check_database()
    except TimeoutError:
        db_result = {"status": "unhealthy", "error": "timed out"}

    checks = {"database": db_result}

    if db_result["status"] != "healthy":
        logger.warning("Readiness check failed", extra={"checks": checks})
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "checks": checks,
                "timestamp": utc_now().isoformat(),
            },
        )

    return {
        "status": "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }
