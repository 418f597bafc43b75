"""In-memory blob cache bounded by byte capacity.

Items are opaque byte strings keyed by string. Capacity is accounted in
fixed-size chunks: an item occupies enough chunks to hold its key and its
data. Items that can never fit are refused; otherwise the least recently
used items are evicted to make room.

Writes go through a BlobWriter sink and are committed only when the sink is
closed without an error, so readers never observe a partially written item.

Example:
    cache = MemoryBlobCache(cache_size=1 << 20, chunk_size=256)
    with cache.set("foo") as w:
        w.write(b"payload")

    stream = cache.get("foo")
    data = stream.read() if stream else None
"""

from __future__ import annotations

import io
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import BinaryIO

from loguru import logger

from ..core.exceptions import AdmissionRefusedError

# Keep items until evicted or deleted
FOREVER = None

MIN_CHUNK_SIZE = 64


@dataclass
class _Item:
    data: bytes
    chunks: int
    expires_at: float | None = None


class BlobWriter:
    """Buffered sink for one blob cache item."""

    def __init__(self, cache: "MemoryBlobCache", key: str, ttl: float | None):
        self._cache = cache
        self._key = key
        self._ttl = ttl
        self._buffer = io.BytesIO()
        self._done = False

    def write(self, data: bytes) -> int:
        if self._done:
            raise ValueError("write to a closed blob writer")
        return self._buffer.write(data)

    def close(self) -> None:
        """Commit the buffered data to the cache.

        Raises:
            AdmissionRefusedError: If the item does not fit in the cache.
        """
        if self._done:
            return
        self._done = True
        self._cache._commit(self._key, self._buffer.getvalue(), self._ttl)

    def discard(self) -> None:
        """Drop the buffered data without committing."""
        self._done = True

    def __enter__(self) -> "BlobWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.discard()
        else:
            self.close()


class MemoryBlobCache:
    """Thread-safe LRU blob cache with a total byte capacity."""

    def __init__(self, cache_size: int, chunk_size: int = MIN_CHUNK_SIZE):
        """Initialize the cache.

        Args:
            cache_size: Total capacity in bytes.
            chunk_size: Expected item size, the unit of capacity accounting.
                Values below 64 are raised to 64.
        """
        self._chunk_size = max(chunk_size, MIN_CHUNK_SIZE)
        self._capacity = max(cache_size, 0) // self._chunk_size
        self._items: OrderedDict[str, _Item] = OrderedDict()
        self._used = 0
        self._lock = threading.Lock()
        self._closed = False

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def capacity(self) -> int:
        """Capacity in chunks."""
        return self._capacity

    @property
    def used(self) -> int:
        """Chunks currently occupied."""
        return self._used

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._items and not self._expired(self._items[key])

    def get(self, key: str) -> BinaryIO | None:
        """Return a stream over the item's data, or None on a miss."""
        with self._lock:
            if self._closed:
                return None

            item = self._items.get(key)
            if item is None:
                return None

            if self._expired(item):
                self._drop(key)
                return None

            self._items.move_to_end(key)
            data = item.data

        return io.BytesIO(data)

    def set(self, key: str, ttl: float | None = FOREVER) -> BlobWriter | None:
        """Open a sink for an item.

        Args:
            key: Item key.
            ttl: Lifetime in seconds, or FOREVER.

        Returns:
            A BlobWriter, or None if the cache is closed.
        """
        with self._lock:
            if self._closed:
                return None

        return BlobWriter(self, key, ttl)

    def set_bytes(self, key: str, data: bytes, ttl: float | None = FOREVER) -> None:
        """Store an item in one call.

        Raises:
            AdmissionRefusedError: If the cache is closed or the item is too large.
        """
        writer = self.set(key, ttl)
        if writer is None:
            raise AdmissionRefusedError("blob cache is closed")

        with writer:
            writer.write(data)

    def delete(self, key: str) -> None:
        with self._lock:
            self._drop(key)

    def close(self) -> None:
        with self._lock:
            self._items.clear()
            self._used = 0
            self._closed = True

    def _chunks_for(self, key: str, size: int) -> int:
        total = len(key.encode("utf-8")) + size
        return max(1, -(-total // self._chunk_size))

    def _expired(self, item: _Item) -> bool:
        return item.expires_at is not None and time.monotonic() >= item.expires_at

    def _drop(self, key: str) -> None:
        item = self._items.pop(key, None)
        if item is not None:
            self._used -= item.chunks

    def _commit(self, key: str, data: bytes, ttl: float | None) -> None:
        chunks = self._chunks_for(key, len(data))
        expires_at = None if ttl is None else time.monotonic() + ttl

        with self._lock:
            if self._closed:
                raise AdmissionRefusedError("blob cache is closed")

            # The previous version never survives a write, even a refused one
            self._drop(key)

            if chunks > self._capacity:
                logger.debug(
                    f"Blob cache refused item: key_size={len(key)}, "
                    f"size={len(data)}, chunks={chunks}, capacity={self._capacity}"
                )
                raise AdmissionRefusedError(
                    f"item of {chunks} chunks exceeds capacity of {self._capacity}"
                )

            while self._used + chunks > self._capacity:
                evicted, item = self._items.popitem(last=False)
                self._used -= item.chunks
                logger.debug(f"Blob cache evicted {evicted!r} ({item.chunks} chunks)")

            self._items[key] = _Item(data=data, chunks=chunks, expires_at=expires_at)
            self._used += chunks
