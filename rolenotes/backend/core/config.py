"""
Configuration Management.

Two sources, nothing hardcoded:

    config/.env               secrets (DB_PASSWORD, JWT_SECRET) via pydantic-settings
    config/settings/*.yaml    everything else, validated by core.config_schema

Both are located relative to the directory holding the ``.project_root``
marker, so entry points work from any subdirectory of the checkout.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from rolenotes.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    LoggingSchema,
    SecuritySchema,
)

PROJECT_MARKER = ".project_root"


def find_project_root() -> Path:
    """Walk up from the working directory to the first one holding the marker file."""
    for candidate in (Path.cwd(), *Path.cwd().parents):
        if (candidate / PROJECT_MARKER).exists():
            return candidate
    raise RuntimeError(f"Project root not found. Ensure {PROJECT_MARKER} file exists.")


def validate_project_root() -> Path:
    """
    Like find_project_root, but exits with a readable message.

    Call this first thing in entry scripts.
    """
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Read one file from config/settings/. An empty file yields {}."""
    config_path = find_project_root() / "config" / "settings" / filename
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Secrets from config/.env (or the environment). Passwords and keys only."""

    db_password: str
    jwt_secret: str

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type[BaseModel], filename: str) -> Any:
    raw = load_yaml_config(filename)
    try:
        return schema_cls.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e


@dataclass(frozen=True)
class AppConfig:
    """Validated YAML settings, one typed section per file."""

    application: ApplicationSchema
    database: DatabaseSchema
    logging: LoggingSchema
    security: SecuritySchema

    @classmethod
    def load(cls) -> "AppConfig":
        return cls(
            application=_load_validated(ApplicationSchema, "application.yaml"),
            database=_load_validated(DatabaseSchema, "database.yaml"),
            logging=_load_validated(LoggingSchema, "logging.yaml"),
            security=_load_validated(SecuritySchema, "security.yaml"),
        )


@lru_cache
def get_settings() -> Settings:
    """Secrets, read once per process."""
    return Settings(_env_file=str(find_project_root() / "config" / ".env"))


@lru_cache
def get_app_config() -> AppConfig:
    """YAML settings, read and validated once per process."""
    return AppConfig.load()


def get_database_url() -> str:
    """SQLAlchemy URL assembled from database.yaml and DB_PASSWORD."""
    db = get_app_config().database
    password = get_settings().db_password
    return f"{db.driver}://{db.user}:{password}@{db.host}:{db.port}/{db.name}"


def get_server_base_url() -> str:
    """Base URL the HTTP server listens on, from application.yaml."""
    server = get_app_config().application.server
    return f"http://{server.host}:{server.port}"
