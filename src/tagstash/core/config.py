"""Configuration management for tagstash."""

import os
from dataclasses import dataclass, field
from pathlib import Path

MEMORY_DB_PATH = ":memory:"


@dataclass
class CacheConfig:
    """Tag cache configuration."""

    # Total byte capacity of the blob cache
    cache_size: int = 64 * 1024 * 1024
    # Expected size of a single tag's record list, used for chunk sizing only
    expected_item_size: int = 4096


def _default_db_path() -> Path:
    """Get default database path."""
    cache_dir = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
    return cache_dir / "tagstash" / "data.sqlite"


@dataclass
class StorageConfig:
    """Persistent index configuration."""

    db_path: Path | str = field(default_factory=_default_db_path)

    @property
    def in_memory(self) -> bool:
        """Whether the index lives in an in-memory database."""
        return str(self.db_path) == MEMORY_DB_PATH


@dataclass
class Config:
    """Main tagstash configuration."""

    cache: CacheConfig = field(default_factory=CacheConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()

        if path := os.environ.get("TAGSTASH_DB_PATH"):
            config.storage.db_path = path if path == MEMORY_DB_PATH else Path(path)

        if size := os.environ.get("TAGSTASH_CACHE_SIZE"):
            config.cache.cache_size = int(size)

        if item_size := os.environ.get("TAGSTASH_EXPECTED_ITEM_SIZE"):
            config.cache.expected_item_size = int(item_size)

        return config
