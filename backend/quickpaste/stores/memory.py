"""
QuickPaste Backend - In-Memory Paste Store
===========================================

What:  PasteStore backed by a dict, for tests and throwaway local runs.
How:   One asyncio.Lock guards the dict. The lock is held for a single
       lookup, insert or pop, never while highlighting or doing I/O.

Data lives in the process: it does not survive restarts and is not shared
between uvicorn workers.
"""

import asyncio
import logging
import uuid
from typing import Dict, Optional

from quickpaste.schemas.paste import Paste
from quickpaste.stores.base import PasteStore

logger = logging.getLogger(__name__)


class InMemoryPasteStore(PasteStore):
    """Dict-backed store; `remove` is atomic because `pop` runs under the lock."""

    def __init__(self):
        self._entries: Dict[uuid.UUID, str] = {}
        self._lock = asyncio.Lock()

    async def create(self, content: str) -> Paste:
        async with self._lock:
            paste_id = uuid.uuid4()
            while paste_id in self._entries:
                paste_id = uuid.uuid4()
            self._entries[paste_id] = content
        logger.debug("Paste %s created in memory", paste_id)
        return Paste(id=paste_id, content=content)

    async def get(self, paste_id: uuid.UUID) -> Optional[Paste]:
        async with self._lock:
            content = self._entries.get(paste_id)
        if content is None:
            return None
        return Paste(id=paste_id, content=content)

    async def remove(self, paste_id: uuid.UUID) -> Optional[Paste]:
        async with self._lock:
            content = self._entries.pop(paste_id, None)
        if content is None:
            return None
        logger.debug("Paste %s removed from memory", paste_id)
        return Paste(id=paste_id, content=content)

    def __len__(self) -> int:
        return len(self._entries)
