"""
Centralized Logging Configuration.

Every module logs through ``get_logger(__name__)``; nothing creates its own
handlers. Output is shaped by config/settings/logging.yaml and can be
overridden per entry point (the CLI forces console output, for example).

Fields carried by each JSON record:
    timestamp, level, logger, event, func_name, lineno
    source      - api, cli, internal or unknown
    request_id  - set by RequestContextMiddleware for HTTP requests
    user_id     - set once the bearer token has been resolved

Usage:
    from rolenotes.backend.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Note created", extra={"note_id": note.id})
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any

import structlog
from structlog.typing import Processor

from rolenotes.backend.core.config import find_project_root, get_app_config
from rolenotes.backend.core.config_schema import FileHandlerSchema

VALID_SOURCES = frozenset({"api", "cli", "internal", "unknown"})

# Loggers that are too chatty at INFO for a request-per-line service
_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def _file_handler(file_config: FileHandlerSchema, formatter: logging.Formatter) -> logging.Handler:
    """Rotating JSONL handler; the path is relative to the project root."""
    log_path = find_project_root() / file_config.path
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=file_config.max_bytes,
        backupCount=file_config.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Any argument left as None falls back to logging.yaml.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format_type: 'json' or 'console'
        enable_console: Write records to stdout
        enable_file_logging: Write JSON records to the rotating log file
    """
    config = get_app_config().logging

    level = level or config.level
    format_type = format_type or config.format
    if enable_console is None:
        enable_console = config.handlers.console.enabled
    if enable_file_logging is None:
        enable_file_logging = config.handlers.file.enabled

    processors = _shared_processors()

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=processors,
    )
    if format_type == "console":
        console_formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
            foreign_pre_chain=processors,
        )
    else:
        console_formatter = json_formatter

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if enable_file_logging:
        root_logger.addHandler(_file_handler(config.handlers.file, json_formatter))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to ``name`` (normally ``__name__``)."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Emit one record tagged with an explicit source.

    For code running outside the HTTP middleware, e.g. CLI services.

    Raises:
        ValueError: If source is not one of VALID_SOURCES
    """
    if source not in VALID_SOURCES:
        raise ValueError(f"Unknown log source {source!r}")
    getattr(logger, level.lower())(message, source=source, **kwargs)
