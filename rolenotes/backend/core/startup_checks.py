"""
Startup Security Checks.

Run from the FastAPI lifespan. Any failure stops the process before it
accepts a request.
"""

from rolenotes.backend.core.config import get_app_config, get_settings
from rolenotes.backend.core.logging import get_logger

logger = get_logger(__name__)


class StartupSecurityError(RuntimeError):
    """A security precondition for serving traffic is not met."""


def _collect_failures() -> list[str]:
    app_config = get_app_config()
    application = app_config.application
    failures: list[str] = []

    secret_length = len(get_settings().jwt_secret)
    minimum = app_config.security.secrets_validation.jwt_secret_min_length
    if secret_length < minimum:
        failures.append(f"JWT_SECRET is {secret_length} chars, minimum is {minimum}")

    if application.environment == "production":
        if application.debug:
            failures.append("debug must be false in production")
        if "*" in application.cors.origins:
            failures.append("wildcard CORS origin is not allowed in production")

    return failures


def run_startup_checks() -> None:
    """
    Raises:
        StartupSecurityError: Listing every failed check
    """
    failures = _collect_failures()
    if failures:
        for failure in failures:
            logger.error("Startup security check failed", extra={"check": failure})
        raise StartupSecurityError(
            f"Startup blocked: {len(failures)} security check(s) failed:\n"
            + "\n".join(f"  - {f}" for f in failures)
        )

    logger.info(
        "Startup security checks passed",
        extra={"environment": get_app_config().application.environment},
    )
