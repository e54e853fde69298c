"""Tests for ScoreTrace."""

from quickopen.matching import ScoreTrace


class TestScoreTrace:
    """Tests for score accumulation and comparison."""

    def test_starts_empty(self):
        """A new trace is zero with an empty log."""
        trace = ScoreTrace()
        assert trace.total == 0
        assert trace.entries == []
        assert trace.explanation == ""

    def test_add_updates_total_and_log(self):
        """add() sums amounts, including negative ones, and logs each."""
        trace = ScoreTrace()
        trace.add(1, "Match a")
        trace.add(-2, "Gap 2")
        assert trace.total == -1
        assert trace.entries == [(1, "Match a"), (-2, "Gap 2")]

    def test_explanation_format(self):
        """Each entry renders as delta, colon, tab, reason."""
        trace = ScoreTrace()
        trace.add(1, "Match s")
        trace.add(-3, "Gap 3")
        assert trace.explanation == "1:\tMatch s\n-3:\tGap 3"

    def test_merge_appends_log_and_total(self):
        """merge() keeps this trace's entries first."""
        first = ScoreTrace()
        first.add(1, "Match a")
        second = ScoreTrace()
        second.add(-1, "Gap 1")
        second.add(1, "Match b")

        first.merge(second)

        assert first.total == 1
        assert first.entries == [(1, "Match a"), (-1, "Gap 1"), (1, "Match b")]
        assert second.total == 0

    def test_comparison_uses_total_only(self):
        """Traces with equal totals compare equal regardless of log."""
        a = ScoreTrace()
        a.add(2, "Match x")
        b = ScoreTrace()
        b.add(1, "Match y")
        b.add(1, "Match z")
        c = ScoreTrace()
        c.add(3, "Match w")

        assert a == b
        assert a.entries != b.entries
        assert a < c
        assert c > b
        assert max(a, c) is c

    def test_entries_is_a_copy(self):
        """Mutating entries does not change the trace."""
        trace = ScoreTrace()
        trace.add(1, "Match a")
        trace.entries.append((5, "bogus"))
        assert trace.entries == [(1, "Match a")]
