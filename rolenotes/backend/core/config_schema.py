"""
Configuration Schemas.

One strict Pydantic model per file in config/settings/. Unknown keys,
missing keys and out-of-range values fail at load time with the file name
in the message, rather than surfacing later as attribute errors.

    application.yaml -> ApplicationSchema
    database.yaml    -> DatabaseSchema
    logging.yaml     -> LoggingSchema
    security.yaml    -> SecuritySchema
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ServerSchema(_StrictBase):
    host: str
    port: int = Field(ge=1, le=65535)


class CorsSchema(_StrictBase):
    origins: list[str]


class HealthChecksSchema(_StrictBase):
    ready_timeout_seconds: float = Field(gt=0)


class ApplicationSchema(_StrictBase):
    """application.yaml: identity, HTTP server and API surface."""

    name: str
    version: str
    description: str
    environment: Literal["development", "staging", "production"]
    debug: bool
    api_prefix: str = Field(pattern=r"^/")
    server: ServerSchema
    cors: CorsSchema
    health_checks: HealthChecksSchema


class DatabaseSchema(_StrictBase):
    """database.yaml: connection target and pool sizing. The password lives in .env."""

    driver: str
    host: str
    port: int = Field(ge=1, le=65535)
    name: str
    user: str
    pool_size: int = Field(ge=1)
    max_overflow: int = Field(ge=0)
    pool_timeout: int = Field(ge=1)
    pool_recycle: int
    echo: bool


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int = Field(ge=1)
    backup_count: int = Field(ge=0)


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    """logging.yaml: level, renderer and output handlers."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    format: Literal["json", "console"]
    handlers: HandlersSchema


class JwtSchema(_StrictBase):
    algorithm: Literal["HS256", "HS384", "HS512"]
    access_token_expire_minutes: int = Field(ge=1)
    audience: str


class SecretsValidationSchema(_StrictBase):
    jwt_secret_min_length: int = Field(ge=16)


class SecuritySchema(_StrictBase):
    """security.yaml: bearer token verification and secret strength rules."""

    jwt: JwtSchema
    secrets_validation: SecretsValidationSchema
