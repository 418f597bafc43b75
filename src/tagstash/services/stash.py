"""Best-match lookup of values by tags."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from loguru import logger

from ..core.exceptions import NotSupportedError
from ..core.types import Entry
from ..search.scoring import MatchScore, query_positions, rank, score_entries

if TYPE_CHECKING:
    from ..app.protocols import TagStoreProtocol


class TagStash:
    """Stores tags of values and returns the best matching values for a query.

    Associations live in a persistent index, and the record lists of the
    most queried tags are kept in a cache. A query is answered from the
    cache first; only tags the cache knows nothing about are fetched from
    the index, and those are cached on the way out.

    Matches are ranked by the number of query tags they match. Values
    matching the same number of tags are ranked by how closely the order of
    their tags, as given to set(), follows the order of the query tags.

    Example:
        stash = TagStash(cache, index)
        stash.set("https://www.example.org/page1.html", "foo", "bar", "baz")
        stash.set("https://www.example.org/page2.html", "foo", "qux", "quux")

        stash.get("qux", "foo", "wah")
        # "https://www.example.org/page2.html"
    """

    def __init__(self, cache: "TagStoreProtocol", index: "TagStoreProtocol"):
        """Initialize with the two stores.

        Args:
            cache: Fast, bounded store consulted first.
            index: Authoritative store.
        """
        self.cache = cache
        self.index = index

    def _warm(self, tags: list[str]) -> list[Entry]:
        stored = self.index.get(tags)
        for entry in stored:
            self.cache.set(entry)

        if stored:
            logger.debug(f"Cached {len(stored)} entries for {len(tags)} tags")
        return stored

    def _get_all(self, tags: Sequence[str]) -> list[MatchScore]:
        tags = list(tags)
        if not tags:
            return []

        positions = query_positions(tags)
        unique = list(positions)

        cached = self.cache.get(unique)
        found = {entry.tag for entry in cached}
        not_cached = [tag for tag in unique if tag not in found]

        stored = self._warm(not_cached) if not_cached else []

        scores = rank(score_entries(cached + stored, positions))
        logger.debug(
            f"Tag query: tags={len(tags)}, cached={len(cached)}, "
            f"stored={len(stored)}, matches={len(scores)}"
        )
        return scores

    def get(self, *tags: str) -> str | None:
        """Return the best matching value for the tags, or None.

        Values matching more of the tags come first. Among values matching
        the same number of tags, the one whose tag order is closest to the
        order of the arguments wins.
        """
        scores = self._get_all(tags)
        if not scores:
            return None

        return scores[0].value

    def get_all(self, *tags: str) -> list[str]:
        """Return every value matching any of the tags, best match first."""
        return [score.value for score in self._get_all(tags)]

    def get_tags(self, value: str) -> list[str]:
        """Return the tags associated with a value.

        Raises:
            NotSupportedError: If neither store supports reverse lookup.
        """
        if self.cache.supports_tag_lookup:
            return self.cache.get_tags(value)

        if self.index.supports_tag_lookup:
            return self.index.get_tags(value)

        raise NotSupportedError("reverse tag lookup is not supported by the stores")

    def set(self, value: str, *tags: str) -> None:
        """Associate tags with a value.

        The order of the tags is significant: earlier tags describe the
        value more strongly. Each association is stored before it is
        cached. The first failure aborts the call; associations already
        made are kept.
        """
        for i, tag in enumerate(tags):
            entry = Entry(value=value, tag=tag, tag_index=i)
            self.index.set(entry)
            self.cache.set(entry)

    def remove(self, value: str, tag: str) -> None:
        """Delete a value-tag association."""
        entry = Entry(value=value, tag=tag)
        self.cache.remove(entry)
        self.index.remove(entry)

    def delete(self, tag: str) -> None:
        """Delete every association of a tag."""
        self.cache.delete(tag)
        self.index.delete(tag)

    def close(self) -> None:
        """Close both stores."""
        try:
            self.cache.close()
        finally:
            self.index.close()

    def __enter__(self) -> "TagStash":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
