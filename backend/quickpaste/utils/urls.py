"""
QuickPaste Backend - Paste URL Composition
===========================================

What:  Builds the retrieval URL returned by POST /.
How:   The scheme is guessed from the request's Host header alone; no
       network probing and no trust in forwarded headers.
"""

from typing import Optional
from uuid import UUID

from quickpaste.exceptions import MalformedInputError

LOOPBACK_MARKERS = ("127.0.0.1", "localhost")


def scheme(host: str) -> str:
    """
    "http" when the host looks like a loopback address, otherwise "https".

    Total over all strings; the check is a plain substring match.
    """
    if any(marker in host for marker in LOOPBACK_MARKERS):
        return "http"
    return "https"


def require_host(host: Optional[str]) -> str:
    """
    Return `host` unchanged if a URL can be built from it.

    Raises:
        MalformedInputError: the Host header is missing or blank.
    """
    if not host or not host.strip():
        raise MalformedInputError(message="Missing Host header", field="host")
    return host


def paste_url(host: Optional[str], paste_id: UUID) -> str:
    """Full URL of a paste, e.g. "https://paste.example.com/<uuid>"."""
    host = require_host(host)
    return f"{scheme(host)}://{host}/{paste_id}"
