"""Test fakes for testing without real infrastructure.

Example:
    from tests.fakes import InMemoryTagStore

    stash = TagStash(cache=InMemoryTagStore(), index=InMemoryTagStore())
"""

from .stores import FailingBlobCache, ForgedError, InMemoryTagStore

__all__ = [
    "FailingBlobCache",
    "ForgedError",
    "InMemoryTagStore",
]
