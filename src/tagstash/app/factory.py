"""Composition root for tagstash.

Wires the default collaborators: an in-memory tag cache over a bounded blob
cache, and a SQLite tag index.

Example:
    from tagstash.app import create_stash
    from tagstash.core.config import CacheConfig, Config

    with create_stash(Config(cache=CacheConfig(cache_size=1 << 12))) as stash:
        stash.set("https://www.example.org/page1.html", "foo", "bar", "baz")
        print(stash.get("bar"))
"""

from __future__ import annotations

from loguru import logger

from ..cache.tags import TagCache
from ..core.config import Config
from ..services.stash import TagStash
from ..store.index import SQLiteTagIndex


def create_stash(config: Config | None = None) -> TagStash:
    """Create a TagStash with the default cache and index.

    Args:
        config: Configuration, defaults to Config.from_env().

    Returns:
        A ready TagStash. Close it to release the cache and the database.

    Raises:
        DatabaseError: If the index database cannot be opened.
    """
    config = config or Config.from_env()

    index = SQLiteTagIndex.from_config(config.storage)
    cache = TagCache.from_config(config.cache)

    logger.debug(
        f"Created tag stash: db={config.storage.db_path}, "
        f"cache_size={config.cache.cache_size}, "
        f"expected_item_size={config.cache.expected_item_size}"
    )
    return TagStash(cache, index)
