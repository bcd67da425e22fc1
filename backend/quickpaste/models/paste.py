"""
QuickPaste Backend - Paste SQLAlchemy Model
============================================

What:  ORM model representing the `pastes` table.
Who:   Used by DatabasePasteStore for its three statements and by Alembic
       for schema management.

Table Design:
    - UUID primary key: the sole lookup key, never reused.
    - content: TEXT, no length limit, never updated after insert.

    There is no index beyond the primary key: every query is a point lookup
    or point delete by id.
"""

import uuid

from sqlalchemy import Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from quickpaste.database import Base


class PasteRecord(Base):
    """A stored paste row. Rows are inserted and deleted, never updated."""

    __tablename__ = "pastes"

    # ── Primary Key ───────────────────────────────────────────────────────
    # Generated client-side so INSERT ... RETURNING works the same on
    # PostgreSQL and SQLite; the migration also installs gen_random_uuid()
    # as the server default for rows inserted outside the application.
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique paste identifier",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Raw paste content, stored exactly as submitted",
    )

    def __repr__(self) -> str:
        # Content is deliberately left out of the repr (it ends up in logs)
        return f"<PasteRecord(id={self.id}, length={len(self.content or '')})>"
