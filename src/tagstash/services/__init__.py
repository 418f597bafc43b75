"""Service layer for tagstash.

Example usage:

    from tagstash.services import TagStash

    with TagStash(cache, index) as stash:
        stash.set("https://www.example.org", "foo", "bar")
        best = stash.get("bar", "foo")
"""

from .stash import TagStash

__all__ = [
    "TagStash",
]
