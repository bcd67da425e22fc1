"""
QuickPaste Backend - Paste Route Handlers
==========================================

What:  The plain-text paste API.
How:   Reads the raw request, delegates to PasteService, returns text/plain.
       Missing pastes, bad input and storage failures are raised as
       exceptions and turned into responses by the global handlers in
       main.py.

Routes:
    GET    /                 usage text
    POST   /                 create a paste from the raw body → URL
    GET    /{id}             paste content
    GET    /{id}/{lang}      paste content, syntax highlighted
    DELETE /{id}             delete a paste

`{id}` is parsed as a UUID by FastAPI; anything else is rejected with 400
before a handler runs.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse

from quickpaste.exceptions import MalformedInputError
from quickpaste.services.paste_service import PasteService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pastes"], default_response_class=PlainTextResponse)

NOT_FOUND_RESPONSE = {404: {"description": "Paste not found"}}


def get_paste_service(request: Request) -> PasteService:
    """FastAPI dependency: a PasteService over the app's shared AppContext."""
    return PasteService(request.app.state.context)


@router.get("/", summary="Usage instructions")
async def index(service: PasteService = Depends(get_paste_service)) -> str:
    return service.usage()


@router.post(
    "/",
    status_code=201,
    summary="Create a paste",
    description=(
        "Stores the raw request body as a new paste and responds with the full "
        "URL it can be retrieved from."
    ),
    responses={
        400: {"description": "Missing Host header or body is not UTF-8"},
        500: {"description": "Storage backend unavailable"},
    },
)
async def upload(
    request: Request,
    service: PasteService = Depends(get_paste_service),
) -> str:
    """
    Create a paste from the raw body.

    The body is taken as-is (no form or JSON decoding) and must be UTF-8.
    The scheme of the returned URL is derived from the Host header.
    """
    raw = await request.body()
    try:
        content = raw.decode("utf-8")
    except UnicodeDecodeError:
        raise MalformedInputError(message="Paste body must be valid UTF-8", field="body")

    return await service.create(content, request.headers.get("host"))


@router.get("/{paste_id}", summary="Retrieve a paste", responses=NOT_FOUND_RESPONSE)
async def retrieve(
    paste_id: UUID,
    service: PasteService = Depends(get_paste_service),
) -> str:
    return await service.retrieve(paste_id)


@router.get(
    "/{paste_id}/{lang}",
    summary="Retrieve a paste with syntax highlighting",
    description=(
        "Returns the paste content with ANSI color escapes for language `lang` "
        "(a language alias or file extension). Unknown languages and themes fall "
        "back to uncolored text and the default theme."
    ),
    responses=NOT_FOUND_RESPONSE,
)
async def retrieve_highlighted(
    paste_id: UUID,
    lang: str,
    theme: Optional[str] = Query(
        default=None,
        description="Pygments style name, e.g. 'monokai' or 'solarized-dark'",
    ),
    service: PasteService = Depends(get_paste_service),
) -> str:
    return await service.retrieve_highlighted(paste_id, lang, theme)


@router.delete("/{paste_id}", summary="Delete a paste", responses=NOT_FOUND_RESPONSE)
async def remove(
    paste_id: UUID,
    service: PasteService = Depends(get_paste_service),
) -> str:
    return await service.delete(paste_id)
