"""Match scoring for tag queries.

Entries coming from the cache and from the index are merged into one
scoreboard per query. Each value is scored by:

- match_count: number of entries (query tags) the value matched
- index_delta: sum over those entries of |query position - tag index|

Values are ranked by match_count descending, then index_delta ascending.
Ties keep the order in which values were first seen.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from ..core.types import Entry


@dataclass
class MatchScore:
    """Query-scoped score of a single value."""

    value: str
    match_count: int = 0
    index_delta: int = 0

    def add(self, delta: int) -> None:
        self.match_count += 1
        self.index_delta += delta


def query_positions(tags: Sequence[str]) -> dict[str, int]:
    """Map each query tag to its position. A repeated tag keeps its last position."""
    return {tag: i for i, tag in enumerate(tags)}


def index_delta(entry: Entry, positions: Mapping[str, int]) -> int:
    """Distance between an entry's tag index and its tag's query position."""
    return abs(positions[entry.tag] - entry.tag_index)


def score_entries(
    entries: Iterable[Entry],
    positions: Mapping[str, int],
) -> list[MatchScore]:
    """Deduplicate entries by value and accumulate their scores.

    Args:
        entries: Entries for tags contained in positions.
        positions: Query position of each tag.

    Returns:
        One MatchScore per distinct value, in order of first occurrence.
    """
    scores: dict[str, MatchScore] = {}
    for entry in entries:
        score = scores.get(entry.value)
        if score is None:
            score = scores[entry.value] = MatchScore(value=entry.value)
        score.add(index_delta(entry, positions))

    return list(scores.values())


def rank(scores: list[MatchScore]) -> list[MatchScore]:
    """Sort scores best first. The sort is stable."""
    return sorted(scores, key=lambda s: (-s.match_count, s.index_delta))
