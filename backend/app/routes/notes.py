"""
QuickNotes Backend - Note Page & Action Handlers
==================================================

What:  The HTML pages (list, detail, add form, edit form) and the actions
       (create, update, remove, back) of the notes UI.
Why:   These routes are the whole user-facing surface of the application.
How:   Each handler reads its query/form parameters, makes at most one
       NoteService call and returns either a rendered template or a
       303 See Other redirect. Errors are raised as application exceptions
       and formatted by the global handlers in main.py.

Route Inventory:
    GET       /                 page?            paginated list
    GET       /new-note, /add   -                creation form
    GET       /note             id               note detail
    GET       /update-note      id               edit form
    POST      /create           title, content   insert → /note?id=N
    GET|POST  /update           id; title, content  update → /
    GET|POST  /remove           id               delete → /
    GET       /back             return?          redirect back
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.context import AppContext, get_app_context
from app.database import get_db_session
from app.exceptions import ValidationError
from app.services.note_service import SQLITE_INT_MAX, note_service, parse_sqlite_int

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

LISTING_URL = "/"


def parse_page(raw: Optional[str], limit: int = 1) -> int:
    """
    Positive page number from the query string; anything else means page 1.

    Pages whose OFFSET would not fit SQLite's INTEGER also fall back to 1.
    """
    page = parse_sqlite_int(raw)
    if page is None or page < 1:
        return 1
    if (page - 1) * limit > SQLITE_INT_MAX:
        return 1
    return page


def require_note_id(raw: Optional[str]) -> str:
    if not raw:
        raise ValidationError(message="ID is required", field="id")
    return raw


def see_other(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=303)


# ── Pages ─────────────────────────────────────────────────────────────────

@router.get("/", response_class=HTMLResponse, summary="List notes page by page")
async def list_notes(
    request: Request,
    page: Optional[str] = Query(default=None, description="1-based page number"),
    ctx: AppContext = Depends(get_app_context),
    db: AsyncSession = Depends(get_db_session),
) -> HTMLResponse:
    """
    Render the listing page.

    The page size comes from settings (one note per page by default);
    next/previous links are driven by NotePage.has_next / has_prev.
    """
    result = await note_service.list_page(
        db,
        page=parse_page(page, ctx.settings.page_size),
        limit=ctx.settings.page_size,
    )
    return ctx.templates.render(request, "index", {"data": result})


@router.get("/new-note", response_class=HTMLResponse, summary="Creation form")
@router.get("/add", response_class=HTMLResponse, include_in_schema=False)
async def add_note_form(
    request: Request,
    ctx: AppContext = Depends(get_app_context),
) -> HTMLResponse:
    return ctx.templates.render(request, "add")


@router.get("/note", response_class=HTMLResponse, summary="Note detail")
async def note_detail(
    request: Request,
    id: Optional[str] = Query(default=None),
    ctx: AppContext = Depends(get_app_context),
    db: AsyncSession = Depends(get_db_session),
) -> HTMLResponse:
    note = await note_service.get_note(db, require_note_id(id))
    return ctx.templates.render(request, "details", {"note": note})


@router.get("/update-note", response_class=HTMLResponse, summary="Edit form")
async def update_note_form(
    request: Request,
    id: Optional[str] = Query(default=None),
    ctx: AppContext = Depends(get_app_context),
    db: AsyncSession = Depends(get_db_session),
) -> HTMLResponse:
    """Same lookup as the detail page, rendered into a pre-filled form."""
    note = await note_service.get_note(db, require_note_id(id))
    return ctx.templates.render(request, "update", {"note": note})


# ── Actions ───────────────────────────────────────────────────────────────

@router.post("/create", status_code=303, summary="Create a note")
async def create_note(
    title: str = Form(default=""),
    content: str = Form(default=""),
    db: AsyncSession = Depends(get_db_session),
) -> RedirectResponse:
    """
    Insert a note and send the browser to its detail page.

    Only POST is routed here; other methods get 405 from the router.
    """
    note = await note_service.create_note(db, title=title, content=content)
    return see_other(f"/note?id={note.id}")


@router.api_route("/update", methods=["GET", "POST"], status_code=303, summary="Update a note")
async def update_note(
    id: Optional[str] = Query(default=None),
    title: str = Form(default=""),
    content: str = Form(default=""),
    db: AsyncSession = Depends(get_db_session),
) -> RedirectResponse:
    await note_service.update_note(db, require_note_id(id), title=title, content=content)
    return see_other(LISTING_URL)


@router.api_route("/remove", methods=["GET", "POST"], status_code=303, summary="Delete a note")
async def remove_note(
    id: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> RedirectResponse:
    await note_service.delete_note(db, require_note_id(id))
    return see_other(LISTING_URL)


@router.get("/back", status_code=303, summary="Redirect back")
async def back(
    return_url: Optional[str] = Query(default=None, alias="return"),
) -> RedirectResponse:
    return see_other(return_url or LISTING_URL)
