# Routes package init
"""
QuickPaste Backend - API Routes Package
========================================

Route Inventory:
    - pastes.py:  GET /, POST /, GET /{id}, GET /{id}/{lang}, DELETE /{id}
    - health.py:  GET /health

Routes stay thin: read the request, call PasteService, wrap the result in
a plain-text response with the right status code.
"""
