"""Application wiring and collaborator protocols for tagstash."""

from .factory import create_stash
from .protocols import BlobCacheProtocol, BlobWriterProtocol, TagStoreProtocol

__all__ = [
    "create_stash",
    "BlobCacheProtocol",
    "BlobWriterProtocol",
    "TagStoreProtocol",
]
