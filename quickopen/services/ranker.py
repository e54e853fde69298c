"""Ranking service: score every candidate, keep the best few."""

from __future__ import annotations

import logging
import multiprocessing
import time
from concurrent.futures import ProcessPoolExecutor
from contextlib import closing
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Optional, Sequence

from ..matching import Grid, match_dp, match_recursive
from ..matching.matcher import MATCHERS

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_MAX_RESULTS",
    "DEMO_FILES",
    "MatchResult",
    "Ranker",
    "RankingCancelled",
    "rank_candidates",
]

DEFAULT_MAX_RESULTS = 30

DEMO_FILES = [
    "module/string.swift",
    "source/string.swift",
    "str/testing.swift",
]


class RankingCancelled(Exception):
    """Raised when a ranking pass is abandoned before it completes."""


@dataclass(frozen=True)
class MatchResult:
    """One ranked candidate."""

    candidate: str
    score: int
    grid: Optional[Grid[Optional[int]]] = field(default=None, compare=False, repr=False)

    def display_grid(self, placeholder: str = ".") -> Optional[Grid[str]]:
        """Grid as text cells with the candidate's characters as a header row.

        Returns None when the result carries no grid.
        """
        if self.grid is None:
            return None
        cells = self.grid.map(lambda score: placeholder if score is None else str(score))
        return cells.inserting_row(list(self.candidate), 0)


def _score_candidate(
    needle: str, candidate: str, matcher: str, keep_grid: bool
) -> Optional[MatchResult]:
    if matcher == "recursive":
        trace = match_recursive(needle, candidate)
        if trace is None:
            return None
        return MatchResult(candidate, trace.total)

    found = match_dp(needle, candidate)
    if found is None:
        return None
    return MatchResult(candidate, found.score, found.grid if keep_grid else None)


def _score_star(args: tuple[str, str, str, bool]) -> Optional[MatchResult]:
    return _score_candidate(*args)


class Ranker:
    """Ranks a fixed candidate list against successive queries.

    Each call to :meth:`rank` scores every candidate from scratch. Candidates
    that do not match are dropped, the rest are ordered by descending score
    with ties kept in candidate order, and at most ``max_results`` are
    returned.
    """

    def __init__(
        self,
        candidates: Iterable[str],
        max_results: int = DEFAULT_MAX_RESULTS,
        workers: int = 0,
        matcher: str = "dp",
        keep_grids: bool = True,
    ) -> None:
        """Initialize the ranker.

        Args:
            candidates: Strings to rank, in their tie-break order.
            max_results: Upper bound on returned results.
            workers: Worker processes for scoring. 0 or 1 scores inline.
            matcher: ``"dp"`` (with grids) or ``"recursive"`` (scores only).
            keep_grids: Attach match grids to results.
        """
        if max_results <= 0:
            raise ValueError(f"max_results must be positive, got {max_results}")
        if workers < 0:
            raise ValueError(f"workers must be non-negative, got {workers}")
        if matcher not in MATCHERS:
            raise ValueError(f"Unknown matcher {matcher!r}, expected one of {', '.join(MATCHERS)}")
        self._candidates = list(candidates)
        self._max_results = max_results
        self._workers = workers
        self._matcher = matcher
        self._keep_grids = keep_grids and matcher == "dp"

    @property
    def candidates(self) -> list[str]:
        return list(self._candidates)

    @property
    def max_results(self) -> int:
        return self._max_results

    def rank(
        self, needle: str, should_cancel: Optional[Callable[[], bool]] = None
    ) -> list[MatchResult]:
        """Rank all candidates against ``needle``.

        Args:
            needle: Query string. Empty matches everything with score 0.
            should_cancel: Polled once per candidate; returning True abandons
                the pass.

        Returns:
            At most ``max_results`` results, best first.

        Raises:
            RankingCancelled: ``should_cancel`` returned True. No partial
                ranking is produced.
        """
        logger.debug("Search begin: needle=%r candidates=%d", needle, len(self._candidates))
        started = time.perf_counter()

        scored: list[tuple[int, MatchResult]] = []
        with closing(self._score_all(needle)) as results:
            for index, result in enumerate(results):
                if should_cancel is not None and should_cancel():
                    logger.debug("Search cancelled: needle=%r after %d candidates", needle, index)
                    raise RankingCancelled(needle)
                if result is not None:
                    scored.append((index, result))

        # Explicit tie-break on input position so equal scores keep candidate order.
        scored.sort(key=lambda pair: (-pair[1].score, pair[0]))
        ranked = [result for _index, result in scored[: self._max_results]]

        logger.debug(
            "Search end: needle=%r matched=%d returned=%d in %.2fms",
            needle,
            len(scored),
            len(ranked),
            (time.perf_counter() - started) * 1000,
        )
        return ranked

    def _score_all(self, needle: str) -> Iterator[Optional[MatchResult]]:
        """Yield one score per candidate, in candidate order."""
        if self._workers <= 1 or len(self._candidates) < 2:
            for candidate in self._candidates:
                yield _score_candidate(needle, candidate, self._matcher, self._keep_grids)
            return

        tasks = [(needle, c, self._matcher, self._keep_grids) for c in self._candidates]
        chunksize = max(1, len(tasks) // (self._workers * 4))
        # rank() may be called from a UI worker thread, so never fork.
        pool = ProcessPoolExecutor(
            max_workers=self._workers, mp_context=multiprocessing.get_context("spawn")
        )
        try:
            yield from pool.map(_score_star, tasks, chunksize=chunksize)
        finally:
            # Drops queued work when the consumer stops early (cancellation).
            pool.shutdown(wait=True, cancel_futures=True)


def rank_candidates(
    needle: str, candidates: Sequence[str], max_results: int = DEFAULT_MAX_RESULTS
) -> list[MatchResult]:
    """One-shot ranking of ``candidates`` against ``needle``."""
    return Ranker(candidates, max_results=max_results).rank(needle)
