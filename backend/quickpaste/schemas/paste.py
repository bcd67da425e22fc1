"""
QuickPaste Backend - Pydantic Schemas
======================================

What:  The `Paste` domain record threaded between stores, the service layer
       and the highlighter, plus the JSON shape of the health endpoint.

The paste routes speak plain text, so `Paste` never appears in a response
body. It is still a pydantic model: frozen (a Paste is immutable once
created) and buildable from ORM rows via `from_attributes`.
"""

import uuid

from pydantic import BaseModel, Field


class Paste(BaseModel):
    """
    A stored paste.

    Invariant: a Paste returned by `get` or `remove` carries exactly the
    content that was passed to the `create` call that produced its id.
    """
    id: uuid.UUID = Field(description="Unique paste identifier (UUID)")
    content: str = Field(description="Paste content, byte-for-byte as submitted")

    model_config = {"frozen": True, "from_attributes": True}


class HealthResponse(BaseModel):
    """
    What:  Service health status for monitoring and load balancer probes.
    Who:   Returned by GET /health.

    Status semantics:
        - healthy:   store reachable
        - unhealthy: store unreachable (durable backend only)
    """
    status: str = Field(description="Overall status: healthy or unhealthy")
    version: str = Field(description="Application version")
    store: str = Field(description="Store backend status: connected, disconnected or memory")
    uptime_seconds: float = Field(description="Seconds since service started")
