"""
QuickNotes Backend - Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the error scenarios of the handlers.
Why:   Services raise meaningful errors without knowing about HTTP; global
       exception handlers (registered in main.py) turn them into plain-text
       responses with the right status code.
How:   Each exception carries a user-facing message and an optional context
       dict that is logged but only exposed when the settings allow it.

Exception Hierarchy:
    QuickNotesError (base)
    ├── ValidationError   → 400 Bad Request (missing id, empty title/content)
    ├── NotFoundError     → 404 Not Found   (lookup/update/delete hit no row)
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class QuickNotesError(Exception):
    """
    Base exception for all QuickNotes application errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Additional debug info (logged server-side)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(QuickNotesError):
    """
    Raised when client input fails validation.

    When:    Required `id` missing, or `title`/`content` empty.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(QuickNotesError):
    """
    Raised when a requested note does not exist.

    When:    Detail/update-form lookup finds no row, or UPDATE/DELETE
             affects zero rows. A non-numeric id can never match and
             lands here too.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "Note",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class DatabaseError(QuickNotesError):
    """
    Raised when a database statement fails unexpectedly.

    HTTP:    500 Internal Server Error

    The original driver message is kept in `context["original_error"]`.
    It is always logged, and sent to the client only when
    `expose_error_details` is enabled.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

    @property
    def detail(self) -> str:
        """Message including the underlying driver error, when one was recorded."""
        original = self.context.get("original_error")
        return f"{self.message}: {original}" if original else self.message
