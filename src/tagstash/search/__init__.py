"""Scoring and ranking of tag query matches."""

from .scoring import MatchScore, index_delta, query_positions, rank, score_entries

__all__ = [
    "MatchScore",
    "index_delta",
    "query_positions",
    "rank",
    "score_entries",
]
