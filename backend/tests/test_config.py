"""
QuickNotes Backend - Settings Tests
=====================================

What:  Defaults and validation of the pydantic-settings configuration.
"""

import pydantic
import pytest

from app.config import DEFAULT_TEMPLATES_DIR, Settings


class TestSettings:

    def test_defaults_match_unconfigured_run(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        cfg = Settings(_env_file=None)

        assert cfg.database_url == "sqlite+aiosqlite:///./data.sqlite"
        assert cfg.backend_port == 8080
        assert cfg.page_size == 1
        assert cfg.templates_dir == DEFAULT_TEMPLATES_DIR
        assert cfg.expose_error_details is True
        assert cfg.is_sqlite is True

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PAGE_SIZE", "10")
        monkeypatch.setenv("BACKEND_PORT", "9090")

        cfg = Settings(_env_file=None)

        assert cfg.page_size == 10
        assert cfg.backend_port == 9090

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Settings(_env_file=None, log_level="chatty")

    @pytest.mark.parametrize("page_size", [0, 101])
    def test_page_size_bounds(self, page_size):
        with pytest.raises(pydantic.ValidationError):
            Settings(_env_file=None, page_size=page_size)

    def test_server_database_is_not_sqlite(self):
        cfg = Settings(_env_file=None, database_url="postgresql+asyncpg://u:p@db/notes")
        assert cfg.is_sqlite is False
