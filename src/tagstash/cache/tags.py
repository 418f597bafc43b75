"""Per-tag record cache backed by a blob cache.

Each tag maps to one blob holding the tag's full record list. Mutations are
read-modify-write cycles on that blob, serialized by a single lock. Reads
are lock free: a write's encoding is complete before it is committed, so a
reader sees either the old or the new list.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Callable, Iterable

from loguru import logger

from ..core.exceptions import (
    AdmissionRefusedError,
    DamagedDataError,
    FailedToCacheError,
    NotSupportedError,
)
from ..core.types import Entry
from . import codec
from .blob import FOREVER, MemoryBlobCache

if TYPE_CHECKING:
    from ..app.protocols import BlobCacheProtocol
    from ..core.config import CacheConfig


class TagCache:
    """Tag store keeping each tag's record list in a blob cache."""

    supports_tag_lookup = False

    def __init__(self, blobs: "BlobCacheProtocol"):
        """Initialize with a blob cache.

        Args:
            blobs: Blob cache holding one item per tag.
        """
        self._blobs = blobs
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: "CacheConfig") -> "TagCache":
        """Create a tag cache over a new in-memory blob cache."""
        return cls(
            MemoryBlobCache(
                cache_size=config.cache_size,
                chunk_size=config.expected_item_size,
            )
        )

    def _read(self, tag: str) -> list[Entry] | None:
        stream = self._blobs.get(tag)
        if stream is None:
            return None

        try:
            return codec.decode(stream, tag)
        except DamagedDataError as e:
            logger.warning(f"Damaged cache data for tag {tag!r}: {e.reason}")
            raise
        finally:
            stream.close()

    def get(self, tags: Iterable[str]) -> list[Entry]:
        """Return the cached entries of the given tags.

        Tags missing from the cache contribute nothing.

        Raises:
            DamagedDataError: If a cached record list cannot be decoded.
        """
        entries: list[Entry] = []
        for tag in tags:
            tag_entries = self._read(tag)
            if tag_entries is None:
                logger.debug(f"Tag cache miss: {tag!r}")
                continue

            entries.extend(tag_entries)

        return entries

    def _update(self, tag: str, op: Callable[[list[Entry]], list[Entry]]) -> None:
        with self._lock:
            current = self._read(tag)
            updated = op(current or [])
            if current is None and not updated:
                return

            data = codec.encode_bytes(updated)

            writer = self._blobs.set(tag, FOREVER)
            if writer is None:
                raise FailedToCacheError(tag)

            try:
                with writer:
                    writer.write(data)
            except AdmissionRefusedError as e:
                logger.debug(f"Tag cache refused {tag!r}: {e}")
                raise FailedToCacheError(tag) from e

    def set(self, entry: Entry) -> None:
        """Store an entry, replacing the tag index of an existing value.

        Raises:
            DamagedDataError: If the tag's cached list is damaged.
            FailedToCacheError: If the blob cache refuses the updated list.
        """

        def upsert(entries: list[Entry]) -> list[Entry]:
            for existing in entries:
                if existing.value == entry.value:
                    existing.tag_index = entry.tag_index
                    return entries

            entries.append(Entry(value=entry.value, tag=entry.tag, tag_index=entry.tag_index))
            return entries

        self._update(entry.tag, upsert)

    def remove(self, entry: Entry) -> None:
        """Remove an entry's value from its tag. Missing values are ignored."""
        self._update(
            entry.tag,
            lambda entries: [e for e in entries if e.value != entry.value],
        )

    def delete(self, tag: str) -> None:
        """Evict a tag's whole record list."""
        with self._lock:
            self._blobs.delete(tag)

    def get_tags(self, value: str) -> list[str]:
        raise NotSupportedError("tag cache does not index values")

    def close(self) -> None:
        self._blobs.close()
