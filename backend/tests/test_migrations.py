"""
QuickNotes Backend - Alembic Migration Tests
==============================================

What:  Runs the real migration scripts against a temporary SQLite file.
Why:   The migration must produce the same table the ORM model describes.
"""

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

ALEMBIC_DIR = Path(__file__).resolve().parents[1] / "alembic"


def _alembic_config(db_path) -> Config:
    config = Config()
    config.set_main_option("script_location", str(ALEMBIC_DIR))
    config.set_main_option("sqlalchemy.url", f"sqlite+aiosqlite:///{db_path}")
    return config


def _inspect(db_path):
    engine = create_engine(f"sqlite:///{db_path}")
    try:
        inspector = inspect(engine)
        tables = inspector.get_table_names()
        columns = (
            {c["name"]: c for c in inspector.get_columns("notes")} if "notes" in tables else {}
        )
        return tables, columns
    finally:
        engine.dispose()


class TestMigrations:

    def test_upgrade_creates_notes_table(self, tmp_path):
        db_path = tmp_path / "migrated.db"

        command.upgrade(_alembic_config(db_path), "head")

        tables, columns = _inspect(db_path)
        assert "notes" in tables
        assert set(columns) == {"id", "title", "content"}
        assert columns["title"]["nullable"] is False
        assert columns["content"]["nullable"] is False

    def test_downgrade_drops_notes_table(self, tmp_path):
        db_path = tmp_path / "migrated.db"
        config = _alembic_config(db_path)

        command.upgrade(config, "head")
        command.downgrade(config, "base")

        tables, _ = _inspect(db_path)
        assert "notes" not in tables
