"""Tests for opening pattern building and matching."""
import logging

import pytest

from gokifu.common.typed_config import PatternEntry
from gokifu.core.models import OpeningMove
from gokifu.core.patterns import OpeningPattern, build_patterns, match_patterns


def _pattern(name, *points, color="B"):
    return OpeningPattern(name=name, coordinates=frozenset(points), color=color)


class TestBuildPatterns:
    def test_entries_sharing_a_name_are_merged(self):
        patterns = build_patterns(
            [
                PatternEntry("corner", ((4, 4),)),
                PatternEntry("side", ((10, 4),)),
                PatternEntry("corner", ((16, 4), (4, 4))),
            ]
        )
        assert [p.name for p in patterns] == ["corner", "side"]
        assert patterns[0].coordinates == frozenset({(4, 4), (16, 4)})

    def test_non_positive_points_dropped(self):
        patterns = build_patterns([PatternEntry("corner", ((0, 4), (4, -1), (4, 4)))])
        assert patterns[0].coordinates == frozenset({(4, 4)})

    def test_pattern_without_valid_points_dropped(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gokifu.core.patterns"):
            patterns = build_patterns([PatternEntry("broken", ((0, 0),)), PatternEntry("empty", ())])
        assert patterns == []
        assert "broken" in caplog.text

    def test_nameless_entry_dropped(self):
        assert build_patterns([PatternEntry("", ((4, 4),))]) == []

    def test_first_color_kept_on_merge(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gokifu.core.patterns"):
            patterns = build_patterns(
                [PatternEntry("corner", ((4, 4),), color="W"), PatternEntry("corner", ((16, 4),), color="B")]
            )
        assert patterns[0].color == "W"
        assert "keeping" in caplog.text

    def test_default_color_is_black(self):
        assert build_patterns([PatternEntry("corner", ((4, 4),))])[0].color == "B"


class TestMatchPatterns:
    def test_corner_matches_black_first_move(self):
        moves = [OpeningMove(4, 4, "B")]
        assert match_patterns(moves, [_pattern("corner", (4, 4))]) == frozenset({"corner"})

    def test_corner_does_not_match_white_first_move(self):
        moves = [OpeningMove(4, 4, "W")]
        assert match_patterns(moves, [_pattern("corner", (4, 4))]) == frozenset()

    def test_white_pattern(self):
        moves = [OpeningMove(16, 4, "B"), OpeningMove(4, 4, "W")]
        assert match_patterns(moves, [_pattern("corner", (4, 4), color="W")]) == frozenset({"corner"})
        assert match_patterns(moves, [_pattern("corner", (16, 4), color="W")]) == frozenset()

    def test_any_color_pattern_accepts_either_monochrome_set(self):
        pattern = _pattern("pair", (4, 4), (16, 16), color="any")
        white = [OpeningMove(10, 10, "B"), OpeningMove(4, 4, "W"), OpeningMove(3, 3, "B"), OpeningMove(16, 16, "W")]
        black = [OpeningMove(4, 4, "B"), OpeningMove(10, 10, "W"), OpeningMove(16, 16, "B")]
        mixed = [OpeningMove(4, 4, "B"), OpeningMove(16, 16, "W")]
        assert match_patterns(white, [pattern]) == frozenset({"pair"})
        assert match_patterns(black, [pattern]) == frozenset({"pair"})
        assert match_patterns(mixed, [pattern]) == frozenset()

    def test_two_point_pattern_needs_single_color(self):
        pattern = _pattern("shimari", (4, 4), (3, 6))
        same = [OpeningMove(4, 4, "B"), OpeningMove(16, 16, "W"), OpeningMove(3, 6, "B")]
        mixed = [OpeningMove(4, 4, "B"), OpeningMove(3, 6, "W")]
        assert match_patterns(same, [pattern]) == frozenset({"shimari"})
        assert match_patterns(mixed, [pattern]) == frozenset()

    @pytest.mark.parametrize("flip_index", [0, 1, 2])
    def test_flipping_any_point_breaks_match(self, flip_index):
        points = [(4, 4), (16, 4), (10, 4)]
        pattern = _pattern("sanrensei", *points)
        moves = [OpeningMove(x, y, "B") for x, y in points]
        assert match_patterns(moves, [pattern]) == frozenset({"sanrensei"})

        x, y = points[flip_index]
        moves[flip_index] = OpeningMove(x, y, "W")
        assert match_patterns(moves, [pattern]) == frozenset()

    def test_missing_point_does_not_match(self):
        moves = [OpeningMove(4, 4, "B")]
        assert match_patterns(moves, [_pattern("pair", (4, 4), (16, 16))]) == frozenset()

    def test_several_patterns_match_independently(self):
        moves = [OpeningMove(4, 4, "B"), OpeningMove(16, 16, "W"), OpeningMove(16, 4, "B")]
        patterns = [
            _pattern("lower-left", (4, 4)),
            _pattern("both-black", (4, 4), (16, 4)),
            _pattern("upper-right", (16, 16), color="W"),
            _pattern("absent", (10, 10)),
        ]
        assert match_patterns(moves, patterns) == frozenset({"lower-left", "both-black", "upper-right"})

    def test_first_stone_on_a_point_decides_color(self):
        moves = [OpeningMove(4, 4, "B"), OpeningMove(4, 4, "W")]
        pattern = _pattern("corner", (4, 4))
        assert match_patterns(moves, [pattern]) == frozenset({"corner"})

    def test_no_moves_no_match(self):
        assert match_patterns([], [_pattern("corner", (4, 4))]) == frozenset()
