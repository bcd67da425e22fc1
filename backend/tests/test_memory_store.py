"""
QuickPaste Backend - In-Memory Store Unit Tests
================================================

What we test:
    ✅ create → get round trip
    ✅ Unknown ids are absent for get and remove
    ✅ remove returns the record once, then the id is gone for good
    ✅ Concurrent removes of one id: exactly one winner
    ✅ Concurrent creates never share an id
"""

import asyncio
from uuid import uuid4

import pytest

from quickpaste.schemas.paste import Paste
from quickpaste.stores import InMemoryPasteStore


class TestInMemoryStoreBasics:
    """create / get / remove on a single task."""

    def setup_method(self):
        self.store = InMemoryPasteStore()

    @pytest.mark.asyncio
    async def test_create_returns_paste_with_content(self):
        paste = await self.store.create("hello")
        assert isinstance(paste, Paste)
        assert paste.content == "hello"

    @pytest.mark.asyncio
    async def test_round_trip(self):
        contents = ["This is a paste!", "", "multi\nline\r\ncontent\n", "ünïcødé ✓"]
        for content in contents:
            created = await self.store.create(content)
            fetched = await self.store.get(created.id)
            assert fetched == created
            assert fetched.content == content

    @pytest.mark.asyncio
    async def test_get_does_not_mutate(self):
        created = await self.store.create("stable")
        await self.store.get(created.id)
        await self.store.get(created.id)
        assert len(self.store) == 1

    @pytest.mark.asyncio
    async def test_unknown_id_is_absent(self):
        await self.store.create("something else")
        unknown = uuid4()
        assert await self.store.get(unknown) is None
        assert await self.store.remove(unknown) is None
        assert len(self.store) == 1

    @pytest.mark.asyncio
    async def test_remove_returns_record_then_absent(self):
        created = await self.store.create("short-lived")

        removed = await self.store.remove(created.id)
        assert removed == created

        assert await self.store.get(created.id) is None
        assert await self.store.remove(created.id) is None

    @pytest.mark.asyncio
    async def test_remove_leaves_other_pastes(self):
        keep = await self.store.create("keep")
        drop = await self.store.create("drop")

        await self.store.remove(drop.id)

        assert await self.store.get(keep.id) == keep


class TestInMemoryStoreConcurrency:
    """Atomicity under concurrently scheduled tasks."""

    def setup_method(self):
        self.store = InMemoryPasteStore()

    @pytest.mark.asyncio
    async def test_concurrent_removes_have_one_winner(self):
        created = await self.store.create("contested")

        results = await asyncio.gather(
            *(self.store.remove(created.id) for _ in range(20))
        )

        winners = [r for r in results if r is not None]
        assert winners == [created]
        assert await self.store.get(created.id) is None

    @pytest.mark.asyncio
    async def test_concurrent_creates_get_unique_ids(self):
        pastes = await asyncio.gather(
            *(self.store.create(f"paste {i}") for i in range(50))
        )

        assert len({p.id for p in pastes}) == 50
        for i, paste in enumerate(pastes):
            assert (await self.store.get(paste.id)).content == f"paste {i}"
