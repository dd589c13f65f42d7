# Routes package init
"""
QuickNotes Backend - Routes Package
=====================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - notes.py:   HTML pages (/, /note, /new-note, /add, /update-note)
                  and actions (/create, /update, /remove, /back)
    - health.py:  GET /health (service health check)

Design Principle:
    Routes stay THIN. They pull parameters out of the request, call
    NoteService, and turn the result into a template render or a redirect.
"""
