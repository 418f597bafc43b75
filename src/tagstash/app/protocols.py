"""Protocol definitions for tagstash collaborators.

The matching engine depends on two stores with the same shape: the tag
cache and the persistent index. Both implement TagStoreProtocol, so either
side can be replaced with a custom implementation (or a fake in tests).

Reverse lookup (tags of a value) is optional. Stores advertise it with the
``supports_tag_lookup`` flag instead of being probed for a method.

Example:
    class MyIndex:
        supports_tag_lookup = False

        def get(self, tags): ...
        def set(self, entry): ...
        def remove(self, entry): ...
        def delete(self, tag): ...
        def close(self): ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO, Iterable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..core.types import Entry


# =============================================================================
# Tag Store Protocol
# =============================================================================


@runtime_checkable
class TagStoreProtocol(Protocol):
    """Protocol for stores of value-tag associations."""

    supports_tag_lookup: bool
    """Whether get_tags() is available."""

    def get(self, tags: Iterable[str]) -> list["Entry"]:
        """Return all entries whose tag is one of the given tags."""
        ...

    def set(self, entry: "Entry") -> None:
        """Store an association, replacing the tag index of an existing pair."""
        ...

    def remove(self, entry: "Entry") -> None:
        """Delete a single association. Missing associations are ignored."""
        ...

    def delete(self, tag: str) -> None:
        """Delete every association of a tag."""
        ...

    def get_tags(self, value: str) -> list[str]:
        """Return the tags of a value. Only valid with supports_tag_lookup."""
        ...

    def close(self) -> None:
        """Release the store's resources."""
        ...


# =============================================================================
# Blob Cache Protocol
# =============================================================================


@runtime_checkable
class BlobWriterProtocol(Protocol):
    """Sink for a single blob cache item.

    Data written to the sink becomes visible only when the writer is closed
    without an error.
    """

    def write(self, data: bytes) -> int:
        ...

    def close(self) -> None:
        ...

    def discard(self) -> None:
        ...

    def __enter__(self) -> "BlobWriterProtocol":
        ...

    def __exit__(self, exc_type, exc, tb) -> None:
        ...


@runtime_checkable
class BlobCacheProtocol(Protocol):
    """Protocol for a byte-capacity bounded, string keyed blob cache."""

    def get(self, key: str) -> BinaryIO | None:
        """Return a readable stream for the item, or None on a miss."""
        ...

    def set(self, key: str, ttl: float | None = None) -> BlobWriterProtocol | None:
        """Return a sink for the item, or None if the cache refuses it.

        A ttl of None keeps the item until it is evicted or deleted.
        """
        ...

    def delete(self, key: str) -> None:
        ...

    def close(self) -> None:
        ...
