"""
QuickPaste Backend - Middleware Unit Tests
===========================================
"""

import logging

import pytest

from quickpaste.middleware.logging import level_for_status
from quickpaste.middleware.request_id import resolve_request_id


class TestRequestId:

    def test_client_id_is_reused(self):
        assert resolve_request_id("abc-123") == "abc-123"

    @pytest.mark.parametrize("supplied", [None, "", "has space", "x" * 65, "line\nbreak"])
    def test_unusable_id_is_replaced(self, supplied):
        rid = resolve_request_id(supplied)
        assert rid != supplied
        assert len(rid) == 8
        int(rid, 16)

    @pytest.mark.asyncio
    async def test_injected_header_not_echoed(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "a b c"})
        assert response.headers["X-Request-ID"] != "a b c"


class TestAccessLog:

    @pytest.mark.parametrize(
        "status,level",
        [(200, logging.INFO), (201, logging.INFO), (404, logging.WARNING), (500, logging.ERROR)],
    )
    def test_level_for_status(self, status, level):
        assert level_for_status(status) == level

    @pytest.mark.asyncio
    async def test_paste_body_is_not_logged(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="quickpaste.access"):
            await test_client.post("/", content=b"top secret paste")

        lines = [r.getMessage() for r in caplog.records if r.name == "quickpaste.access"]
        assert len(lines) == 1
        assert "POST / -> 201" in lines[0]
        assert "top secret paste" not in lines[0]

    @pytest.mark.asyncio
    async def test_health_is_not_logged(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="quickpaste.access"):
            await test_client.get("/health")
        assert not [r for r in caplog.records if r.name == "quickpaste.access"]
