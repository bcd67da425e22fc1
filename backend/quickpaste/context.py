"""
QuickPaste Backend - Application Context
=========================================

What:  The immutable bundle of one PasteStore and one Highlighter that every
       request handler shares.
How:   build_context() picks the store backend from settings and loads the
       highlight tables, once, at app construction. The app factory stores
       the result on `app.state.context`.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from quickpaste.config import Settings
from quickpaste.database import create_session_factory
from quickpaste.services.highlighter import HighlightResources, Highlighter
from quickpaste.stores import DatabasePasteStore, InMemoryPasteStore, PasteStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContext:
    """
    Shared, read-only request context.

    Frozen: handlers can only use the store and highlighter, never swap
    them. Mutation happens inside the store alone.
    """
    store: PasteStore
    highlighter: Highlighter


def build_context(
    settings: Settings,
    engine: Optional[AsyncEngine] = None,
    resources: Optional[HighlightResources] = None,
) -> AppContext:
    """
    Assemble the AppContext described by `settings`.

    Args:
        settings:  Application settings; `store_backend` selects the store.
        engine:    Async engine for the database backend. Required when
                   store_backend is "database", ignored otherwise.
        resources: Pre-loaded highlight tables; loaded here when omitted.
    """
    if settings.store_backend == "database":
        if engine is None:
            raise ValueError("store_backend 'database' requires an engine")
        store: PasteStore = DatabasePasteStore(create_session_factory(engine))
    else:
        store = InMemoryPasteStore()
    logger.info("Paste store backend: %s", type(store).__name__)

    if resources is None:
        resources = HighlightResources.load(default_theme=settings.highlight_theme)

    return AppContext(store=store, highlighter=Highlighter(resources))
