"""SQLAlchemy ORM models for the tagstash index.

The models mirror the tables created by the schema script and serve as the
target metadata for Alembic migrations.
"""

from sqlalchemy import Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models in tagstash."""

    pass


class EntryModel(Base):
    """A value-tag association.

    tag_index is the position the tag had in the list the value was tagged
    with.
    """

    __tablename__ = "entries"
    __table_args__ = (
        UniqueConstraint("tag", "value", name="uq_entries_tag_value"),
        Index("idx_entries_value", "value"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tag: Mapped[str] = mapped_column(Text, nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    tag_index: Mapped[int] = mapped_column(Integer, nullable=False)
