"""Bounded per-tag cache for tagstash.

This package keeps a hot view of the tag index in memory:
- MemoryBlobCache: byte-capacity bounded LRU blob store
- codec: encoding of one tag's record list
- TagCache: per-tag record lists with atomic read-modify-write updates

Example:
    from tagstash.cache import MemoryBlobCache, TagCache

    cache = TagCache(MemoryBlobCache(cache_size=1 << 20))
    cache.set(Entry("https://www.example.org", "foo", 0))
    entries = cache.get(["foo"])
"""

from .blob import FOREVER, BlobWriter, MemoryBlobCache
from .tags import TagCache

__all__ = [
    "FOREVER",
    "BlobWriter",
    "MemoryBlobCache",
    "TagCache",
]
