"""Business logic services for QuickOpen."""

from .ranker import (
    DEFAULT_MAX_RESULTS,
    DEMO_FILES,
    MatchResult,
    Ranker,
    RankingCancelled,
    rank_candidates,
)

__all__ = [
    "DEFAULT_MAX_RESULTS",
    "DEMO_FILES",
    "MatchResult",
    "Ranker",
    "RankingCancelled",
    "rank_candidates",
]
