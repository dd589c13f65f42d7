"""
QuickNotes Backend - Note SQLAlchemy Model
============================================

What:  ORM model representing the `notes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
Who:   Used by NoteService for CRUD operations, by init_models() and by Alembic.

Table Design:
    - Integer primary key with AUTOINCREMENT: ids are assigned by SQLite on
      insert and never reused after a delete
    - title / content: TEXT NOT NULL; "non-empty" is checked in the service
    - No secondary indexes; every lookup goes through the primary key
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Note(Base):
    """
    A short text note.

    Lifecycle:
        1. Inserted by the create handler (id assigned by storage)
        2. Title/content replaced in place by the update handler
        3. Deleted by the remove handler (no soft-delete)
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Emits AUTOINCREMENT so SQLite never hands out a deleted note's id again
    __table_args__ = {"sqlite_autoincrement": True}

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<Note(id={self.id}, title={self.title!r})>"
