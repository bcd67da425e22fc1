"""
QuickPaste Backend - Paste Service Unit Tests
==============================================

What:  Tests for PasteService, the handler logic between routes and stores.
How:   Uses a mocked PasteStore and Highlighter (no storage, no Pygments).

What we test:
    ✅ Absent pastes become NotFoundError for retrieve, highlight and delete
    ✅ create composes the URL from the host and the new id
    ✅ A bad host is rejected before the store is touched
    ✅ Storage errors propagate unchanged
    ✅ Highlighting receives the stored content, lang and theme as given
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from quickpaste.context import AppContext
from quickpaste.exceptions import MalformedInputError, NotFoundError, StorageUnavailableError
from quickpaste.schemas.paste import Paste
from quickpaste.services.paste_service import DELETED_MESSAGE, USAGE, PasteService
from quickpaste.stores import PasteStore


class TestPasteService:

    def setup_method(self):
        self.store = AsyncMock(spec=PasteStore)
        self.highlighter = MagicMock()
        self.service = PasteService(AppContext(store=self.store, highlighter=self.highlighter))
        self.paste = Paste(id=uuid4(), content="let x = 5;")

    def test_usage_lists_every_route(self):
        text = self.service.usage()
        assert text == USAGE
        for route in ("POST /", "GET /<id>", "GET /<id>/<lang>", "DELETE /<id>"):
            assert route in text

    @pytest.mark.asyncio
    async def test_create_returns_url(self):
        self.store.create.return_value = self.paste

        url = await self.service.create("let x = 5;", "paste.example.com")

        assert url == f"https://paste.example.com/{self.paste.id}"
        self.store.create.assert_awaited_once_with("let x = 5;")

    @pytest.mark.asyncio
    async def test_create_without_host_never_writes(self):
        with pytest.raises(MalformedInputError):
            await self.service.create("orphan", None)
        self.store.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_storage_error_propagates(self):
        self.store.create.side_effect = StorageUnavailableError()
        with pytest.raises(StorageUnavailableError):
            await self.service.create("lost", "localhost")

    @pytest.mark.asyncio
    async def test_retrieve_found(self):
        self.store.get.return_value = self.paste
        assert await self.service.retrieve(self.paste.id) == "let x = 5;"

    @pytest.mark.asyncio
    async def test_retrieve_absent_raises_not_found(self):
        self.store.get.return_value = None
        with pytest.raises(NotFoundError, match="Paste not found"):
            await self.service.retrieve(uuid4())

    @pytest.mark.asyncio
    async def test_retrieve_highlighted_passes_content_through(self):
        self.store.get.return_value = self.paste
        self.highlighter.render.return_value = "<colored>"

        result = await self.service.retrieve_highlighted(self.paste.id, "rs", "monokai")

        assert result == "<colored>"
        self.highlighter.render.assert_called_once_with("let x = 5;", "rs", "monokai")

    @pytest.mark.asyncio
    async def test_retrieve_highlighted_absent_skips_highlighter(self):
        self.store.get.return_value = None
        with pytest.raises(NotFoundError):
            await self.service.retrieve_highlighted(uuid4(), "rs")
        self.highlighter.render.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_found(self):
        self.store.remove.return_value = self.paste
        assert await self.service.delete(self.paste.id) == DELETED_MESSAGE

    @pytest.mark.asyncio
    async def test_delete_absent_raises_not_found(self):
        self.store.remove.return_value = None
        with pytest.raises(NotFoundError):
            await self.service.delete(uuid4())

    @pytest.mark.asyncio
    async def test_get_storage_error_is_not_not_found(self):
        self.store.get.side_effect = StorageUnavailableError()
        with pytest.raises(StorageUnavailableError):
            await self.service.retrieve(uuid4())
