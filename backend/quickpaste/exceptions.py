"""
QuickPaste Backend - Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the few ways a request can fail.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return terse plain-text responses with the right status code.
Who:   Raised by stores, services and URL helpers; caught by global handlers.

Exception Hierarchy:
    QuickPasteError (base)
    ├── NotFoundError             → 404 Not Found
    ├── MalformedInputError       → 400 Bad Request
    └── StorageUnavailableError   → 500 Internal Server Error

A missing paste is an ordinary outcome for the stores (they return None).
NotFoundError only exists so the service layer can hand that outcome to the
HTTP layer without knowing about status codes.
"""

from typing import Any, Dict, Optional


class QuickPasteError(Exception):
    """
    Base exception for all QuickPaste application errors.

    Attributes:
        message:  User-facing error description
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(QuickPasteError):
    """
    Raised when a requested paste does not exist (or was already deleted).

    HTTP: 404 Not Found, body "Paste not found".
    """

    def __init__(
        self,
        resource: str = "paste",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class MalformedInputError(QuickPasteError):
    """
    Raised when request input cannot be used as given.

    When:  Missing Host header (no URL can be built), request body that is
           not valid UTF-8.
    HTTP:  400 Bad Request
    """

    def __init__(
        self,
        message: str = "Malformed request",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class StorageUnavailableError(QuickPasteError):
    """
    Raised when the storage backend cannot complete an operation.

    What:    Connection lost, pool exhausted, query failed.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The original
    driver error is chained (`raise ... from`) and logged server-side only.
    Operations are not retried automatically.
    """

    def __init__(
        self,
        message: str = "Storage backend is unavailable",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
