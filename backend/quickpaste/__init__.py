"""
QuickPaste Backend - Application Package Initializer
=====================================================

What: Marks the `quickpaste` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend is layered so each piece can be tested on its own:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← verbs + paths → status codes
    ├─────────────────────────────────────┤
    │   PasteService (handler logic)      │  ← composes Store + Highlighter
    ├─────────────────────────────────────┤
    │  PasteStore        │  Highlighter   │  ← storage backends │ Pygments
    ├─────────────────────────────────────┤
    │  Database (async SQLAlchemy) / RAM  │
    └─────────────────────────────────────┘

    The Store and the Highlighter are bundled into a single immutable
    AppContext at startup and shared by every request.
"""

__version__ = "1.0.0"
