"""
QuickPaste Backend - Paste Service (Request Handler Logic)
===========================================================

What:  The five paste operations, composed from the Store and the Highlighter.
How:   Each method awaits one store call and, for highlighted retrieval, runs
       the highlighter on the result. A missing paste becomes NotFoundError;
       storage failures propagate untouched.
Who:   Called by the route handlers in quickpaste/routes/pastes.py.

Operation → outcome → status:
    usage                  →  USAGE text              →  200
    create                 →  paste URL               →  201 | 400 | 500
    retrieve               →  content                 →  200 | 404
    retrieve_highlighted   →  (highlighted) content   →  200 | 404
    delete                 →  "Deleted!"              →  200 | 404

The service never looks inside paste content. It only branches on whether
the store returned a paste.
"""

import logging
from typing import Optional
from uuid import UUID

from quickpaste.context import AppContext
from quickpaste.exceptions import NotFoundError
from quickpaste.utils.urls import paste_url, require_host

logger = logging.getLogger(__name__)

USAGE = """
    USAGE

      POST /

          accepts raw data in the body of the request and responds with a URL of
          a page containing the body's content

      GET /<id>

          retrieves the content for the paste with id `<id>`

      GET /<id>/<lang>

          retrieves the content for the paste with id `<id>`, syntax highlighted
          for the language `<lang>` (an alias or file extension, e.g. `py`, `rs`);
          `?theme=<name>` picks a color theme

      DELETE /<id>

          permanently deletes the paste with id `<id>`
    """

DELETED_MESSAGE = "Deleted!"


class PasteService:
    """
    Handler logic over a shared AppContext.

    Holds no state of its own; constructing one per request is free.
    """

    def __init__(self, context: AppContext):
        self.store = context.store
        self.highlighter = context.highlighter

    def usage(self) -> str:
        return USAGE

    async def create(self, content: str, host: Optional[str]) -> str:
        """
        Store `content` and return its retrieval URL.

        The host is checked before the store is touched: a request that
        cannot be answered with a URL never writes a row.

        Raises:
            MalformedInputError: no usable Host header.
            StorageUnavailableError: the store could not persist the paste.
        """
        host = require_host(host)
        paste = await self.store.create(content)
        logger.info("Created paste %s (%d chars)", paste.id, len(content))
        return paste_url(host, paste.id)

    async def retrieve(self, paste_id: UUID) -> str:
        paste = await self.store.get(paste_id)
        if paste is None:
            raise NotFoundError(resource="paste", resource_id=str(paste_id))
        return paste.content

    async def retrieve_highlighted(
        self,
        paste_id: UUID,
        lang: str,
        theme: Optional[str] = None,
    ) -> str:
        """
        Paste content rendered for `lang`.

        An unrecognized `lang` or `theme` is not an error: the highlighter
        falls back and the client gets the content without a signal telling
        the two cases apart.
        """
        paste = await self.store.get(paste_id)
        if paste is None:
            raise NotFoundError(resource="paste", resource_id=str(paste_id))
        return self.highlighter.render(paste.content, lang, theme)

    async def delete(self, paste_id: UUID) -> str:
        paste = await self.store.remove(paste_id)
        if paste is None:
            raise NotFoundError(resource="paste", resource_id=str(paste_id))
        logger.info("Deleted paste %s", paste_id)
        return DELETED_MESSAGE
