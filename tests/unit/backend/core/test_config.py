"""
Unit Tests for Configuration.

Loads the YAML files shipped in config/settings and checks the schema
guards against malformed input.
"""

from types import SimpleNamespace
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from rolenotes.backend.core.config import (
    find_project_root,
    get_app_config,
    get_database_url,
    get_server_base_url,
)
from rolenotes.backend.core.config_schema import DatabaseSchema, JwtSchema


class TestProjectRoot:
    """Tests for project root discovery."""

    def test_finds_marker_file(self):
        assert (find_project_root() / ".project_root").exists()

    def test_raises_outside_project(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        with pytest.raises(RuntimeError, match="Project root not found"):
            find_project_root()


class TestAppConfig:
    """Tests for the shipped YAML configuration."""

    def test_all_sections_load(self):
        app_config = get_app_config()

        assert app_config.application.api_prefix == "/api/v1"
        assert app_config.security.jwt.algorithm == "HS256"
        assert app_config.database.driver.startswith("postgresql")
        assert app_config.logging.level

    def test_config_is_cached(self):
        assert get_app_config() is get_app_config()

    def test_server_base_url(self):
        server = get_app_config().application.server

        assert get_server_base_url() == f"http://{server.host}:{server.port}"

    def test_database_url_combines_yaml_and_secret(self):
        with patch(
            "rolenotes.backend.core.config.get_settings",
            return_value=SimpleNamespace(db_password="s3cret"),
        ):
            url = get_database_url()

        db = get_app_config().database
        assert url == f"{db.driver}://{db.user}:s3cret@{db.host}:{db.port}/{db.name}"


class TestSchemas:
    """Tests for strict schema validation."""

    def test_unknown_key_is_rejected(self):
        with pytest.raises(ValidationError):
            JwtSchema(
                algorithm="HS256",
                access_token_expire_minutes=60,
                audience="rolenotes-api",
                issuer="unexpected",
            )

    def test_missing_key_is_rejected(self):
        with pytest.raises(ValidationError):
            DatabaseSchema(driver="postgresql+asyncpg", host="localhost")
