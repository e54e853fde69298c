"""Score accumulator that remembers where its points came from."""

from __future__ import annotations

from functools import total_ordering

__all__ = ["ScoreTrace"]


@total_ordering
class ScoreTrace:
    """Running score total with an ordered log of contributions.

    Comparison looks at the total only. Two traces with the same total but
    different logs compare equal; the log exists for explanation output.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self) -> None:
        self._total = 0
        self._log: list[tuple[int, str]] = []

    @property
    def total(self) -> int:
        return self._total

    @property
    def entries(self) -> list[tuple[int, str]]:
        """Copy of the ``(delta, reason)`` log, oldest first."""
        return list(self._log)

    @property
    def explanation(self) -> str:
        """One ``delta:<TAB>reason`` line per contribution."""
        return "\n".join(f"{amount}:\t{reason}" for amount, reason in self._log)

    def add(self, amount: int, reason: str) -> None:
        """Add ``amount`` (may be negative) and record why."""
        self._total += amount
        self._log.append((amount, reason))

    def merge(self, other: ScoreTrace) -> None:
        """Append another trace's log and add its total."""
        self._total += other._total
        self._log.extend(other._log)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScoreTrace):
            return NotImplemented
        return self._total == other._total

    def __lt__(self, other: ScoreTrace) -> bool:
        if not isinstance(other, ScoreTrace):
            return NotImplemented
        return self._total < other._total

    def __repr__(self) -> str:
        return f"ScoreTrace(total={self._total}, entries={len(self._log)})"
