"""Create notes table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `notes` table: one row per user-owned note.
How:   Generic UUID / timezone-aware DateTime types, so the migration runs on
       PostgreSQL and SQLite alike.

Rollback: downgrade() drops the table (destructive, all notes are lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the notes table, its unique id index and the owner index."""
    op.create_table(
        "notes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        # Same limit as the title validator
        sa.Column("title", sa.String(250), nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("creation_date", sa.DateTime(timezone=True), nullable=False),
        # NULL until the note is first updated
        sa.Column("edit_date", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index("ix_notes_id", "notes", ["id"], unique=True)

    # Every query filters by owner
    op.create_index("idx_notes_user_id", "notes", ["user_id"])


def downgrade() -> None:
    op.drop_index("idx_notes_user_id", table_name="notes")
    op.drop_index("ix_notes_id", table_name="notes")
    op.drop_table("notes")
