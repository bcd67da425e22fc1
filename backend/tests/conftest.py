"""
QuickPaste Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Session-scoped (created once for all tests):
    └── highlight_resources: Pygments syntax/theme tables (slow-ish to build)

    Function-scoped (created fresh for each test):
    ├── highlighter: Highlighter over the shared resources
    ├── memory_store: Empty InMemoryPasteStore
    ├── memory_context: AppContext(memory_store, highlighter)
    ├── sqlite_store: DatabasePasteStore on a throwaway SQLite file
    └── test_client: HTTPX AsyncClient talking to an app built on memory_context
"""

import os

# Environment must be set before quickpaste.config is imported anywhere:
# the module-level app in quickpaste.main is built from these settings.
os.environ["STORE_BACKEND"] = "memory"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from quickpaste.config import Settings
from quickpaste.context import AppContext
from quickpaste.database import create_engine_from_settings, create_schema, create_session_factory
from quickpaste.services.highlighter import HighlightResources, Highlighter
from quickpaste.stores import DatabasePasteStore, InMemoryPasteStore


# ══════════════════════════════════════════════════════════════════════════
# Session-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture(scope="session")
def highlight_resources():
    """Syntax and theme tables, loaded once like at app startup."""
    return HighlightResources.load(default_theme="monokai")


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def highlighter(highlight_resources):
    return Highlighter(highlight_resources)


@pytest.fixture
def memory_store():
    return InMemoryPasteStore()


@pytest.fixture
def memory_context(memory_store, highlighter):
    return AppContext(store=memory_store, highlighter=highlighter)


@pytest_asyncio.fixture
async def sqlite_store(tmp_path):
    """
    Provides a DatabasePasteStore backed by a fresh SQLite database.

    What:    The real durable store, run against SQLite via aiosqlite.
    How:     Creates the schema with metadata.create_all, disposes the
             engine after the test.
    """
    settings = Settings(
        store_backend="database",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'pastes.db'}",
    )
    engine = create_engine_from_settings(settings)
    await create_schema(engine)
    try:
        yield DatabasePasteStore(create_session_factory(engine))
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def test_client(memory_context):
    """
    Provides an async HTTP test client for endpoint testing.

    How:  ASGITransport routes requests straight into an app built with
          `memory_context`. The base URL makes the Host header
          "localhost:8000", so created paste URLs use http.

    Usage:
        async def test_usage(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    from quickpaste.main import create_app

    app = create_app(context=memory_context)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://localhost:8000") as client:
        yield client
