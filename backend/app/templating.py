"""
QuickNotes Backend - HTML Template Loading
============================================

What:  Loads the fixed set of page templates and renders them per request.
Why:   Every page is server-rendered; loading all templates at startup turns a
       missing or broken file into a startup failure instead of a 500 on the
       first visitor.
How:   Wraps FastAPI's Jinja2Templates. Each logical page name maps to one
       file; load_templates() compiles all of them eagerly.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import HTMLResponse

logger = logging.getLogger(__name__)

# Logical page name → file in the templates directory
TEMPLATE_FILES: Dict[str, str] = {
    "index": "index.html",
    "add": "add.html",
    "details": "details.html",
    "update": "update.html",
}


class NoteTemplates:
    """Compiled page templates plus the Jinja2 environment that owns them."""

    def __init__(self, directory: str, files: Mapping[str, str] = TEMPLATE_FILES):
        self.directory = directory
        self.files = dict(files)
        self._jinja = Jinja2Templates(directory=directory)

    def load(self) -> None:
        """
        Compile every page template.

        Raises:
            jinja2.TemplateNotFound / jinja2.TemplateSyntaxError on a bad file.
        """
        for name, filename in self.files.items():
            self._jinja.get_template(filename)
            logger.info("Loaded template: %s (%s)", name, filename)

    @property
    def names(self):
        return list(self.files)

    def render(
        self,
        request: Request,
        name: str,
        context: Optional[Dict[str, Any]] = None,
        status_code: int = 200,
    ) -> HTMLResponse:
        """
        Render page `name` into an HTML response.

        Rendering happens eagerly, so template errors raise here, inside the
        route handler, and reach the global exception handlers.
        """
        return self._jinja.TemplateResponse(
            request,
            self.files[name],
            context or {},
            status_code=status_code,
            media_type="text/html; charset=utf-8",
        )


def load_templates(directory: str) -> NoteTemplates:
    """Build a NoteTemplates for `directory` and compile all pages."""
    templates = NoteTemplates(directory)
    templates.load()
    return templates
