# Middleware package init
"""
QuickPaste Backend - Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → Route Handler

    - Request ID runs first so the access log line carries the ID.
    - Logging captures response status and duration on the way out.
"""
