"""
QuickNotes Backend - Pydantic Schemas
=======================================

What:  Pydantic models handed to templates and returned by JSON routes.
Why:   Templates and the health check get a fixed, validated shape instead of
       live ORM objects bound to a session.
How:   Services build these from ORM rows (`from_attributes`); route handlers
       pass them to Jinja2 or let FastAPI serialize them.
"""

from typing import List

from pydantic import BaseModel, Field


class NoteResponse(BaseModel):
    """
    What:  Full representation of a note.
    Who:   Rendered by the details and update templates, and as items of NotePage.
    """
    id: int = Field(description="Storage-assigned note identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")

    model_config = {"from_attributes": True}


class NotePage(BaseModel):
    """
    What:  One window of the note listing.
    Who:   Rendered by the index template.

    Pagination strategy:
        Offset-based with an N+1 lookahead: the service asks storage for one row
        more than the page holds. If that extra row arrives, there is a next
        page; it is then dropped from `notes`. No COUNT query is issued.
    """
    notes: List[NoteResponse] = Field(description="Notes on this page, in id order")
    page: int = Field(ge=1, description="Current 1-based page number")
    has_next: bool = Field(description="Whether a following page has notes")
    has_prev: bool = Field(description="Whether this is not the first page")

    @property
    def prev_page(self) -> int:
        return self.page - 1

    @property
    def next_page(self) -> int:
        return self.page + 1


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
