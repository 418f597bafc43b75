"""Baseline schema for the tag index.

Creates the entries table holding value-tag associations and the index
used for reverse lookups.

Revision ID: 0001
Revises: None
Create Date: 2026-10-18
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the entries table."""
    op.create_table(
        "entries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("tag", sa.Text(), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column("tag_index", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tag", "value", name="uq_entries_tag_value"),
        sqlite_autoincrement=True,
    )
    op.create_index("idx_entries_value", "entries", ["value"])


def downgrade() -> None:
    """Drop the entries table."""
    op.drop_index("idx_entries_value", table_name="entries")
    op.drop_table("entries")
