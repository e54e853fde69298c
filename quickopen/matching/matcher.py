"""Fuzzy subsequence matching with gap penalties.

A needle matches a haystack when its characters appear in the haystack in
order. Every matched character is worth +1 and every run of skipped haystack
characters between two matched characters costs its length. Characters
skipped before the first match are free. The score of a pair is the best
total over all ways of placing the needle in the haystack.

Two matchers implement the same scoring:

- ``match_recursive`` searches accept/skip branches and returns a
  ``ScoreTrace`` that explains the winning path. It is the reference used
  to check the grid matcher.
- ``match_dp`` fills a needle-by-haystack grid row by row. It is the one
  used for ranking and the grid doubles as a visualization.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from .grid import Grid
from .score import ScoreTrace

__all__ = ["MATCHERS", "GridMatch", "match_dp", "match_recursive", "match_score"]

MATCHERS = ("dp", "recursive")


class GridMatch(NamedTuple):
    """Successful grid match: best score plus the per-cell scores."""

    score: int
    grid: Grid[Optional[int]]


def match_recursive(
    needle: str, haystack: str, gap: Optional[int] = None
) -> Optional[ScoreTrace]:
    """Score ``needle`` against ``haystack`` by accept/skip search.

    At each haystack position the search may skip the character, or, when it
    equals the next needle character, accept it. Accepting pays off the gap
    carried since the previous match. Ties between the two branches go to
    accepting, so among equally good placements the earliest wins.

    After a match the carried gap restarts at 0, so the gap paid for the next
    needle character only depends on where it lands. That lets the search be
    evaluated bottom-up over ``(needle offset, haystack offset)`` without
    recursion; the winning path is then replayed to build the trace.

    Args:
        needle: Query characters.
        haystack: Candidate string.
        gap: Skipped characters carried from an earlier match. ``None``
            means nothing has matched yet, so skips are not penalized.

    Returns:
        The winning trace, or None if the needle does not fit in order.

    Raises:
        ValueError: ``gap`` is negative.
    """
    if gap is not None and gap < 0:
        raise ValueError(f"gap must be non-negative, got {gap}")
    if not needle:
        return ScoreTrace()

    length = len(haystack)
    # best[row][start]: best total for needle[row:] placed in haystack[start:]
    # with the gap counted from start. choice[row][start]: where needle[row] lands.
    best: list[list[Optional[int]]] = [[None] * (length + 1) for _ in needle]
    best.append([0] * (length + 1))
    choice: list[list[Optional[int]]] = [[None] * (length + 1) for _ in needle]

    for row in range(len(needle) - 1, -1, -1):
        following = best[row + 1]
        # Running max of following[column + 1] - column over column >= start.
        top: Optional[int] = None
        at: Optional[int] = None
        for start in range(length - 1, -1, -1):
            rest = following[start + 1]
            if haystack[start] == needle[row] and rest is not None:
                if top is None or rest - start >= top:
                    top, at = rest - start, start
            if at is not None:
                best[row][start] = 1 + start + top
                choice[row][start] = at

    if gap is None:
        column = None
        for candidate, char in enumerate(haystack):
            rest = best[1][candidate + 1]
            if char == needle[0] and rest is not None:
                if column is None or rest > best[1][column + 1]:
                    column = candidate
    else:
        column = choice[0][0]
    if column is None:
        return None

    trace = ScoreTrace()
    carried = gap
    start = 0
    for row, char in enumerate(needle):
        if row > 0:
            column = choice[row][start]
            carried = 0
        if carried is not None and carried + column - start > 0:
            skipped = carried + column - start
            trace.add(-skipped, f"Gap {skipped}")
        trace.add(1, f"Match {char}")
        start = column + 1
    return trace


def match_dp(needle: str, haystack: str) -> Optional[GridMatch]:
    """Score ``needle`` against ``haystack`` by filling a match grid.

    Cell ``(column, row)`` holds the best score of the first ``row + 1``
    needle characters with the last one placed at ``column``, or None when no
    such placement exists. Row 0 scores 1 wherever the first needle character
    occurs. Later rows only consider columns after the first scored column of
    the row above, taking the best predecessor minus the gap in between. A
    row without any scored cell ends the match.

    The best predecessor is kept as a running maximum of
    ``score + column`` over the row above, which gives the same cell values
    as rescanning every earlier column.

    Returns:
        ``GridMatch(score, grid)``, or None if the needle does not fit. An
        empty needle matches with score 0 and a grid of height 0.
    """
    width = len(haystack)
    grid: Grid[Optional[int]] = Grid(width, len(needle), None)
    if not needle:
        return GridMatch(0, grid)

    previous: Optional[list[Optional[int]]] = None
    for row, needle_char in enumerate(needle):
        matched = False
        if previous is None:
            for column, char in enumerate(haystack):
                if char == needle_char:
                    grid[column, row] = 1
                    matched = True
        else:
            first = next(column for column, score in enumerate(previous) if score is not None)
            reach = previous[first] + first
            for column in range(first + 1, width):
                if haystack[column] == needle_char:
                    # max(previous[p] - (column - p - 1)) + 1 over p < column
                    grid[column, row] = reach - column + 2
                    matched = True
                score = previous[column]
                if score is not None and score + column > reach:
                    reach = score + column
        if not matched:
            return None
        previous = grid.row(row)

    best = max(score for score in previous if score is not None)
    return GridMatch(best, grid)


def match_score(needle: str, haystack: str, matcher: str = "dp") -> Optional[int]:
    """Return just the score using the named matcher (``"dp"`` or ``"recursive"``)."""
    if matcher == "dp":
        found = match_dp(needle, haystack)
        return None if found is None else found.score
    if matcher == "recursive":
        trace = match_recursive(needle, haystack)
        return None if trace is None else trace.total
    raise ValueError(f"Unknown matcher {matcher!r}, expected one of {', '.join(MATCHERS)}")
