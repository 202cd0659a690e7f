"""Tests for win/loss aggregation."""
from gokifu.core.stats import aggregate, win_rate
from tests.helpers_sgf import make_record


class TestAggregate:
    def test_empty(self):
        stats = aggregate([])
        assert (stats.total, stats.black_wins, stats.white_wins) == (0, 0, 0)
        assert stats.per_pattern == {}

    def test_counts_by_result_prefix(self):
        records = [
            make_record("a.sgf", result="B+R"),
            make_record("b.sgf", result="W+2.5"),
            make_record("c.sgf", result="B+0.5"),
            make_record("d.sgf", result="Draw"),
            make_record("e.sgf", result=""),
        ]
        stats = aggregate(records)
        assert stats.total == 5
        assert stats.black_wins == 2
        assert stats.white_wins == 1
        assert stats.black_wins + stats.white_wins <= stats.total

    def test_per_pattern_counts(self):
        records = [
            make_record("a.sgf", result="B+R", patterns={"corner", "side"}),
            make_record("b.sgf", result="W+R", patterns={"corner"}),
            make_record("c.sgf", result="W+R"),
        ]
        stats = aggregate(records)
        corner = stats.per_pattern["corner"]
        side = stats.per_pattern["side"]
        assert (corner.total, corner.black_wins, corner.white_wins) == (2, 1, 1)
        assert (side.total, side.black_wins, side.white_wins) == (1, 1, 0)
        assert all(p.total <= stats.total for p in stats.per_pattern.values())

    def test_unmatched_patterns_absent(self):
        stats = aggregate([make_record("a.sgf", result="B+R")])
        assert "corner" not in stats.per_pattern


class TestWinRate:
    def test_half(self):
        assert win_rate(1, 2) == "50.0"

    def test_empty_slice(self):
        assert win_rate(0, 0) == "0.0"
