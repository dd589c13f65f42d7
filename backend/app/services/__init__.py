# Services package init
"""
QuickNotes Backend - Services Layer
=====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).

Service Inventory:
    - NoteService: list/get/create/update/delete notes, one SQL statement each
"""
