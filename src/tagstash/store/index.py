"""Persistent tag index backed by SQLite."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from loguru import logger

from ..core.types import Entry
from .database import Database

if TYPE_CHECKING:
    from ..core.config import StorageConfig


class SQLiteTagIndex:
    """Authoritative store of value-tag associations.

    Each (tag, value) pair is stored once; setting an existing pair updates
    its tag index in place.
    """

    supports_tag_lookup = True

    def __init__(self, db: Database):
        """Initialize with database connection.

        Args:
            db: Database instance to use for operations. Connected on demand.
        """
        self.db = db
        if not db.connected:
            db.connect()

    @classmethod
    def from_config(cls, config: "StorageConfig") -> "SQLiteTagIndex":
        """Open the index at the configured database path."""
        return cls(Database(config.db_path))

    def get(self, tags: Iterable[str]) -> list[Entry]:
        """Get all entries whose tag is one of the given tags.

        Args:
            tags: Tags to look up.

        Returns:
            Matching entries in insertion order.
        """
        tags = list(dict.fromkeys(tags))
        if not tags:
            return []

        placeholders = ", ".join("?" for _ in tags)
        rows = self.db.execute(
            f"""
            SELECT tag, value, tag_index FROM entries
            WHERE tag IN ({placeholders})
            ORDER BY id
            """,
            tuple(tags),
        )

        logger.debug(f"Index lookup: {len(tags)} tags, {len(rows)} entries")
        return [
            Entry(value=row["value"], tag=row["tag"], tag_index=row["tag_index"])
            for row in rows
        ]

    def get_tags(self, value: str) -> list[str]:
        """Get all tags associated with a value, in tag index order."""
        rows = self.db.execute(
            "SELECT tag FROM entries WHERE value = ? ORDER BY tag_index, id",
            (value,),
        )
        return [row["tag"] for row in rows]

    def set(self, entry: Entry) -> None:
        """Insert or update a value-tag association."""
        with self.db.transaction() as cursor:
            cursor.execute(
                """
                INSERT INTO entries (tag, value, tag_index) VALUES (?, ?, ?)
                ON CONFLICT(tag, value) DO UPDATE SET
                    tag_index = excluded.tag_index
                """,
                (entry.tag, entry.value, entry.tag_index),
            )

    def remove(self, entry: Entry) -> None:
        """Delete a single value-tag association."""
        with self.db.transaction() as cursor:
            cursor.execute(
                "DELETE FROM entries WHERE tag = ? AND value = ?",
                (entry.tag, entry.value),
            )

    def delete(self, tag: str) -> None:
        """Delete all associations of a tag."""
        with self.db.transaction() as cursor:
            cursor.execute("DELETE FROM entries WHERE tag = ?", (tag,))

    def close(self) -> None:
        self.db.close()
