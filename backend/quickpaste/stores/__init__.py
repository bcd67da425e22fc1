# Stores package init
"""
QuickPaste Backend - Paste Stores
==================================

Store Inventory:
    - PasteStore (abstract): the create/get/remove capability interface
    - DatabasePasteStore: durable backend (PostgreSQL in production, SQLite in tests)
    - InMemoryPasteStore: dict + asyncio.Lock, for tests and local runs

The backend is chosen once, in quickpaste.context.build_context(), and
injected into the AppContext. Nothing downstream inspects which one it got.
"""

from quickpaste.stores.base import PasteStore
from quickpaste.stores.database import DatabasePasteStore
from quickpaste.stores.memory import InMemoryPasteStore

__all__ = ["PasteStore", "DatabasePasteStore", "InMemoryPasteStore"]
