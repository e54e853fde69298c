"""Fuzzy subsequence matching kernel."""

from .grid import Grid
from .matcher import GridMatch, match_dp, match_recursive, match_score
from .score import ScoreTrace

__all__ = [
    "Grid",
    "GridMatch",
    "ScoreTrace",
    "match_dp",
    "match_recursive",
    "match_score",
]
