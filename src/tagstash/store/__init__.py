"""Persistent index for tagstash.

This package provides the authoritative store of value-tag associations:
- Database: SQLite connection and transaction management
- SQLiteTagIndex: value-tag association storage with reverse lookup
- migrate: Alembic migrations for managed databases

Example:
    from tagstash.store import Database, SQLiteTagIndex

    index = SQLiteTagIndex(Database("data.sqlite"))
    index.set(Entry("https://www.example.org", "foo", 0))
"""

from .database import Database
from .index import SQLiteTagIndex

__all__ = [
    "Database",
    "SQLiteTagIndex",
]
