"""
QuickNotes Backend - Note Service (CRUD Business Logic)
=========================================================

What:  The note operations behind every route: list a page, fetch one,
       create, update, delete.
Why:   Keeps SQL and business rules independent of HTTP concerns.
How:   Each operation issues exactly one parameterized SQL statement through
       the request's AsyncSession. Writes commit before returning, so a
       redirect produced afterwards always points at persisted state.
Who:   Called by route handlers in app/routes/notes.py.

Error Handling Strategy:
    - Empty title/content         → ValidationError (400)
    - No row matched / affected   → NotFoundError (404)
    - Any SQLAlchemyError         → DatabaseError (500), original text in context

Design Decision:
    NoteService is stateless. It receives the session for each call, so it
    can be shared by all requests and exercised in tests with any session.
"""

import logging
import re
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.note import Note
from app.schemas.note import NotePage, NoteResponse

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Title and content are required"

# SQLite INTEGER is a signed 64-bit value
SQLITE_INT_MAX = 2**63 - 1
SQLITE_INT_MIN = -(2**63)

_DECIMAL_RE = re.compile(r"-?[0-9]+")


def parse_sqlite_int(raw: Optional[str]) -> Optional[int]:
    """
    Parse a plain ASCII decimal that fits SQLite's INTEGER, else None.

    int() alone also accepts whitespace, "_" separators and non-ASCII
    digits; none of those name a row, and out-of-range values cannot be
    bound as parameters at all.
    """
    if raw is None or not _DECIMAL_RE.fullmatch(raw):
        return None
    value = int(raw)
    if not SQLITE_INT_MIN <= value <= SQLITE_INT_MAX:
        return None
    return value


def _coerce_note_id(note_id: str) -> Optional[int]:
    """Integer id for `note_id`, or None when it cannot match any row."""
    return parse_sqlite_int(note_id)


def _require_fields(title: str, content: str) -> None:
    if not title or not content:
        raise ValidationError(
            message=REQUIRED_FIELDS_MESSAGE,
            context={"title_empty": not title, "content_empty": not content},
        )


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_page():   N+1 windowed listing
        - get_note():    single note retrieval with not-found handling
        - create_note(): validated insert returning the stored note
        - update_note(): validated in-place update by id
        - delete_note(): delete by id
    """

    async def list_page(self, db: AsyncSession, page: int = 1, limit: int = 1) -> NotePage:
        """
        Return one page of notes in id order.

        Windowing:
            SELECT ... ORDER BY id LIMIT :limit + 1 OFFSET (:page - 1) * :limit

            The extra row is only a lookahead. If it comes back there is a next
            page and it is dropped; has_prev is simply page > 1.

        Args:
            db: Async database session
            page: 1-based page number (callers normalize bad input to 1)
            limit: Notes per page
        """
        offset = (page - 1) * limit
        try:
            result = await db.execute(
                select(Note).order_by(Note.id).limit(limit + 1).offset(offset)
            )
            notes = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing notes (page=%d): %s", page, str(e))
            raise DatabaseError(
                message="Could not retrieve notes",
                context={"original_error": str(e), "page": page},
            )

        has_next = len(notes) > limit
        if has_next:
            notes = notes[:limit]  # Drop the lookahead row

        logger.debug("Listed %d notes for page %d (has_next=%s)", len(notes), page, has_next)
        return NotePage(
            notes=[NoteResponse.model_validate(note) for note in notes],
            page=page,
            has_next=has_next,
            has_prev=page > 1,
        )

    async def get_note(self, db: AsyncSession, note_id: str) -> NoteResponse:
        """
        Retrieve a single note by id.

        Raises:
            NotFoundError: No note with that id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        numeric_id = _coerce_note_id(note_id)
        if numeric_id is None:
            raise NotFoundError(resource="Note", resource_id=note_id)

        try:
            result = await db.execute(select(Note).where(Note.id == numeric_id))
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note",
                context={"original_error": str(e), "note_id": note_id},
            )

        if note is None:
            raise NotFoundError(resource="Note", resource_id=note_id)
        return NoteResponse.model_validate(note)

    async def create_note(self, db: AsyncSession, title: str, content: str) -> NoteResponse:
        """
        Insert a new note and return it with its storage-assigned id.

        Raises:
            ValidationError: title or content empty; nothing is written
            DatabaseError: INSERT or commit failed
        """
        _require_fields(title, content)

        note = Note(title=title, content=content)
        try:
            db.add(note)
            await db.flush()  # Assigns the autoincrement id
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e))
            raise DatabaseError(
                message="Could not create the note",
                context={"original_error": str(e)},
            )

        logger.info("Note %d created", note.id)
        return NoteResponse.model_validate(note)

    async def update_note(
        self, db: AsyncSession, note_id: str, title: str, content: str
    ) -> None:
        """
        Replace title and content of note `note_id`.

        Binds title, content, id, in that order, into
        UPDATE notes SET title = ?, content = ? WHERE id = ?

        Raises:
            ValidationError: title or content empty
            NotFoundError: zero rows affected
            DatabaseError: statement or commit failed
        """
        _require_fields(title, content)
        numeric_id = _coerce_note_id(note_id)
        if numeric_id is None:
            raise NotFoundError(resource="Note", resource_id=note_id)

        try:
            result = await db.execute(
                update(Note)
                .where(Note.id == numeric_id)
                .values(title=title, content=content)
            )
            if result.rowcount == 0:
                raise NotFoundError(resource="Note", resource_id=note_id)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not update the note",
                context={"original_error": str(e), "note_id": note_id},
            )

        logger.info("Note %d updated", numeric_id)

    async def delete_note(self, db: AsyncSession, note_id: str) -> None:
        """
        Delete note `note_id`.

        Raises:
            NotFoundError: zero rows affected; the table is unchanged
            DatabaseError: statement or commit failed
        """
        numeric_id = _coerce_note_id(note_id)
        if numeric_id is None:
            raise NotFoundError(resource="Note", resource_id=note_id)

        try:
            result = await db.execute(
                delete(Note)
                .where(Note.id == numeric_id)
            )
            if result.rowcount == 0:
                raise NotFoundError(resource="Note", resource_id=note_id)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not delete the note",
                context={"original_error": str(e), "note_id": note_id},
            )

        logger.info("Note %d deleted", numeric_id)


# ── Singleton Instance ────────────────────────────────────────────────────
# NoteService holds no state, so one instance serves every request
note_service = NoteService()
