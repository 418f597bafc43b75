"""Tagging for arbitrary string values, typically URIs.

tagstash stores many-to-many associations between values and tags and
returns the best match for a query with multiple tags. Matches are ranked
by how many query tags they match, then by how closely the order of their
tags follows the order of the query.

Associations are kept in a persistent index, and the most queried tags are
cached in memory. Both stores can be replaced with custom implementations
of TagStoreProtocol.

Example:
    from tagstash import create_stash

    with create_stash() as stash:
        stash.set("https://www.example.org/page1.html", "foo", "bar", "baz")
        stash.set("https://www.example.org/page2.html", "foo", "qux", "quux")
        stash.get("qux", "foo", "wah")
"""

from .app import create_stash
from .core import (
    CacheConfig,
    Config,
    DamagedDataError,
    DatabaseError,
    Entry,
    FailedToCacheError,
    NotSupportedError,
    StorageConfig,
    TagStashError,
)
from .services import TagStash

__all__ = [
    "create_stash",
    "CacheConfig",
    "Config",
    "DamagedDataError",
    "DatabaseError",
    "Entry",
    "FailedToCacheError",
    "NotSupportedError",
    "StorageConfig",
    "TagStash",
    "TagStashError",
]
