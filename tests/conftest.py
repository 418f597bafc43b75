"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from tagstash.cache.blob import MemoryBlobCache
from tagstash.cache.tags import TagCache
from tagstash.services.stash import TagStash
from tagstash.store.database import Database
from tagstash.store.index import SQLiteTagIndex

TEST_CACHE_SIZE = 1 << 12


@pytest.fixture
def test_db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path for tests."""
    return tmp_path / "test-data.sqlite"


@pytest.fixture
def db(test_db_path: Path) -> Database:
    """Provide a connected database instance."""
    database = Database(test_db_path)
    database.connect()
    yield database
    database.close()


@pytest.fixture
def index(db: Database) -> SQLiteTagIndex:
    """Provide a SQLiteTagIndex instance."""
    return SQLiteTagIndex(db)


@pytest.fixture
def blobs() -> MemoryBlobCache:
    """Provide a small in-memory blob cache."""
    cache = MemoryBlobCache(cache_size=TEST_CACHE_SIZE)
    yield cache
    cache.close()


@pytest.fixture
def tag_cache(blobs: MemoryBlobCache) -> TagCache:
    """Provide a TagCache over the blob cache fixture."""
    return TagCache(blobs)


@pytest.fixture
def stash(tag_cache: TagCache, index: SQLiteTagIndex) -> TagStash:
    """Provide a TagStash with a real cache and a SQLite index."""
    return TagStash(tag_cache, index)
