"""
QuickNotes Backend - Application Package Initializer
======================================================

What: Marks the `app` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    A small layered web application:

    ┌─────────────────────────────────────┐
    │     Routes (HTML pages & actions)   │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │       Services (NoteService)        │  ← validation, one SQL statement each
    ├─────────────────────────────────────┤
    │   Models, Schemas & Templates       │  ← SQLAlchemy ORM, Pydantic, Jinja2
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← async SQLAlchemy over SQLite
    └─────────────────────────────────────┘

    Handles shared by requests (engine, session factory, templates) live in
    an AppContext owned by each application instance (see app/context.py).
"""

__version__ = "1.0.0"
