"""
QuickPaste Backend - Database Paste Store
==========================================

What:  Durable PasteStore on a relational database via async SQLAlchemy.
How:   Each operation is exactly one statement in its own short transaction:

           create  →  INSERT INTO pastes (id, content) ... RETURNING id, content
           get     →  SELECT id, content FROM pastes WHERE id = :id
           remove  →  DELETE FROM pastes WHERE id = :id RETURNING id, content

       There is no application-level locking. Atomicity of remove() comes
       from the database: of two concurrent DELETE ... RETURNING statements
       on one row, only one sees the row.
Who:   Built by build_context() when STORE_BACKEND=database.

Error Handling:
    Any SQLAlchemyError (connection refused, pool timeout, query failure) is
    logged with the operation name and re-raised as StorageUnavailableError.
    The driver exception is chained for the server-side log; the client only
    ever sees a generic 500.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql import Executable

from quickpaste.exceptions import StorageUnavailableError
from quickpaste.models.paste import PasteRecord
from quickpaste.schemas.paste import Paste
from quickpaste.stores.base import PasteStore

logger = logging.getLogger(__name__)


class DatabasePasteStore(PasteStore):
    """
    PasteStore over an `async_sessionmaker`.

    The store holds no per-request state; one instance is shared by every
    request through the AppContext. Concurrency is bounded by the engine's
    connection pool.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def create(self, content: str) -> Paste:
        statement = (
            insert(PasteRecord)
            .values(content=content)
            .returning(PasteRecord.id, PasteRecord.content)
        )
        paste = await self._fetch_one_or_none(statement, operation="create")
        if paste is None:
            # INSERT ... RETURNING always yields the inserted row
            raise StorageUnavailableError(
                message="Storage backend did not return the created paste",
                context={"operation": "create"},
            )
        logger.info("Paste %s created", paste.id)
        return paste

    async def get(self, paste_id: UUID) -> Optional[Paste]:
        statement = select(PasteRecord.id, PasteRecord.content).where(
            PasteRecord.id == paste_id
        )
        return await self._fetch_one_or_none(
            statement, operation="get", paste_id=paste_id
        )

    async def remove(self, paste_id: UUID) -> Optional[Paste]:
        statement = (
            delete(PasteRecord)
            .where(PasteRecord.id == paste_id)
            .returning(PasteRecord.id, PasteRecord.content)
            .execution_options(synchronize_session=False)
        )
        paste = await self._fetch_one_or_none(
            statement, operation="remove", paste_id=paste_id
        )
        if paste is not None:
            logger.info("Paste %s removed", paste_id)
        return paste

    async def _fetch_one_or_none(
        self,
        statement: Executable,
        operation: str,
        paste_id: Optional[UUID] = None,
    ) -> Optional[Paste]:
        """
        Run `statement` in its own transaction and map the single result row.

        The row is read before the transaction commits; a cancelled request
        that never reaches the commit leaves the table untouched.
        """
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(statement)
                    row = result.one_or_none()
        except SQLAlchemyError as e:
            logger.error(
                "Database error during %s (paste_id=%s): %s",
                operation,
                paste_id,
                type(e).__name__,
            )
            context = {"operation": operation, "original_error": type(e).__name__}
            if paste_id is not None:
                context["paste_id"] = str(paste_id)
            raise StorageUnavailableError(context=context) from e

        if row is None:
            return None
        return Paste(id=row.id, content=row.content)
