"""
QuickNotes Backend - Application Context
==========================================

What:  The bundle of long-lived handles every request handler needs.
Why:   Database engine, session factory and templates belong to one
       application instance, not to the process. Tests build as many
       isolated applications as they like.
How:   create_app() builds one AppContext, stores it on `app.state.context`,
       and handlers receive it through the get_app_context dependency.
"""

import time
from dataclasses import dataclass, field

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.config import Settings
from app.database import create_engine_from_settings, create_session_factory
from app.templating import NoteTemplates, load_templates


@dataclass
class AppContext:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    templates: NoteTemplates
    started_at: float = field(default_factory=time.time)


def build_context(settings: Settings) -> AppContext:
    """Create the engine and session factory, and load all templates."""
    engine = create_engine_from_settings(settings)
    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=create_session_factory(engine),
        templates=load_templates(settings.templates_dir),
    )


def get_app_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context of the serving application."""
    return request.app.state.context
