"""
QuickPaste Backend - URL Helper Unit Tests
===========================================
"""

from uuid import UUID

import pytest

from quickpaste.exceptions import MalformedInputError
from quickpaste.utils.urls import paste_url, require_host, scheme

PASTE_ID = UUID("3f2b8c1e-4a5d-4e6f-8a9b-0c1d2e3f4a5b")


class TestScheme:

    @pytest.mark.parametrize("host", ["localhost", "localhost:8000", "127.0.0.1", "127.0.0.1:3000"])
    def test_loopback_hosts_use_http(self, host):
        assert scheme(host) == "http"

    @pytest.mark.parametrize("host", ["paste.example.com", "example.com:443", "10.0.0.5", ""])
    def test_other_hosts_use_https(self, host):
        assert scheme(host) == "https"

    def test_marker_anywhere_in_host(self):
        # Plain substring check, not hostname parsing
        assert scheme("my-localhost-proxy.dev") == "http"


class TestPasteUrl:

    def test_builds_full_url(self):
        assert paste_url("paste.example.com", PASTE_ID) == (
            "https://paste.example.com/3f2b8c1e-4a5d-4e6f-8a9b-0c1d2e3f4a5b"
        )

    def test_keeps_port(self):
        assert paste_url("localhost:8000", PASTE_ID) == (
            "http://localhost:8000/3f2b8c1e-4a5d-4e6f-8a9b-0c1d2e3f4a5b"
        )

    @pytest.mark.parametrize("host", [None, "", "   "])
    def test_missing_host_is_malformed(self, host):
        with pytest.raises(MalformedInputError, match="Host"):
            paste_url(host, PASTE_ID)

    def test_require_host_passes_value_through(self):
        assert require_host("example.com") == "example.com"
