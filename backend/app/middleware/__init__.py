# Middleware package init
"""
QuickNotes Backend - Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → Route Handler

    The request ID is set before the logging middleware reads it, so every
    access-log line carries the ID that is also returned to the client.
"""
