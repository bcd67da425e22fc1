"""
QuickPaste Backend - Abstract Paste Store Interface
====================================================

What:  Abstract base class defining the contract every storage backend honours.
How:   Concrete stores inherit from PasteStore and implement create(), get()
       and remove().
Who:   Called by PasteService; selected once at startup by build_context().

Implementations:
    - DatabasePasteStore: relational database through async SQLAlchemy
    - InMemoryPasteStore: process-local dict guarded by one asyncio.Lock
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from quickpaste.schemas.paste import Paste


class PasteStore(ABC):
    """
    Capability interface for creating, reading and deleting pastes.

    Contract:
        - All three operations are safe to await concurrently from many
          request tasks.
        - A missing id is not an error: get() and remove() return None.
        - Backend failures are raised as StorageUnavailableError, never
          swallowed and never turned into None.
    """

    @abstractmethod
    async def create(self, content: str) -> Paste:
        """
        Store `content` under a freshly allocated id.

        Returns:
            The new Paste. Its id never collides with a live paste, even
            under concurrent create() calls.

        Raises:
            StorageUnavailableError: the backend could not persist the paste.
        """
        ...

    @abstractmethod
    async def get(self, paste_id: UUID) -> Optional[Paste]:
        """
        Look up a live paste. Does not modify the store.

        Returns:
            The Paste, or None if `paste_id` was never created or was removed.
        """
        ...

    @abstractmethod
    async def remove(self, paste_id: UUID) -> Optional[Paste]:
        """
        Delete a paste and return it as it was just before deletion.

        Atomic: when several callers remove the same id concurrently, exactly
        one receives the Paste and every other caller receives None.

        Returns:
            The deleted Paste, or None if `paste_id` was not live (in which
            case the store is unchanged).
        """
        ...
