"""Create pastes table

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Creates the `pastes` table: UUID primary key plus one TEXT column.
How:   gen_random_uuid() is the server default so rows inserted outside the
       application also get an id (built in since PostgreSQL 13).

Rollback: downgrade() drops the table entirely (all pastes are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "pastes",
        sa.Column(
            "id",
            sa.Uuid(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
            comment="Unique paste identifier",
        ),
        sa.Column(
            "content",
            sa.Text(),
            nullable=False,
            comment="Raw paste content, stored exactly as submitted",
        ),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("pastes")
