"""
QuickNotes Backend - Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a default `settings` object.
Who:   Passed to create_app(); the default instance is used by uvicorn and Alembic.
When:  Loaded once at module import time; validated before app starts.

Defaults:
    Every default reproduces the behaviour of an unconfigured run:
    a `data.sqlite` file in the working directory, port 8080 and one note
    per listing page. Deployments override them through the environment.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Templates ship inside the package, next to this module
DEFAULT_TEMPLATES_DIR = str(Path(__file__).resolve().parent / "templates")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern for readability.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # What: Async SQLAlchemy connection string
    # Format: sqlite+aiosqlite:///<path>  (three slashes = relative path)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data.sqlite",
        description="Async SQLAlchemy database URL",
    )

    # ── Templates ─────────────────────────────────────────────────────────
    # What: Directory holding index.html, add.html, details.html, update.html
    templates_dir: str = Field(default=DEFAULT_TEMPLATES_DIR)

    # ── Listing ───────────────────────────────────────────────────────────
    # What: Notes shown per page on the listing route
    # The listing query fetches page_size + 1 rows to detect a next page
    page_size: int = Field(default=1, ge=1, le=100)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8080, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    # What: Whether 500 responses carry the underlying error text
    # Only suitable for local/demo deployments; details are always logged
    expose_error_details: bool = Field(default=True)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @property
    def is_sqlite(self) -> bool:
        """True when the configured database is SQLite (no server-side pool sizing)."""
        return self.database_url.startswith("sqlite")

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_URL and database_url both work
    }


# Default instance, used when create_app() is called without explicit settings
settings = Settings()
