"""Tests for GoKifuConfig and the tolerant settings converters."""
import pytest

from gokifu.common.typed_config import (
    GoKifuConfig,
    PatternEntry,
    normalize_path,
    parse_pattern_color,
    parse_point,
    parse_points,
    safe_bool,
    safe_choice,
    safe_int,
)


class TestConverters:
    @pytest.mark.parametrize(
        "value,expected",
        [(None, 5), (True, 5), (3.7, 5), ("12", 12), ("x", 5), (7, 7)],
    )
    def test_safe_int(self, value, expected):
        assert safe_int(value, 5) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [("yes", True), ("0", False), ("fasle", False), (1, True), (None, False)],
    )
    def test_safe_bool(self, value, expected):
        assert safe_bool(value) is expected

    @pytest.mark.parametrize("value,expected", [(None, None), ("", None), ("   ", None), (3, None), (" SGF ", "SGF")])
    def test_normalize_path(self, value, expected):
        assert normalize_path(value) == expected

    def test_safe_choice(self):
        assert safe_choice("13", (9, 13, 19), 19) == 13
        assert safe_choice(21, (9, 13, 19), 19) == 19

    @pytest.mark.parametrize(
        "value,expected",
        [
            ([4, 4], (4, 4)),
            ((16, 4), (16, 4)),
            ({"x": 3, "y": "16"}, (3, 16)),
            ("4-4", (4, 4)),
            ("16,4", (16, 4)),
            ("(3:3)", (3, 3)),
            ("0-4", (0, 4)),
            ("4", None),
            ([4], None),
            ([True, 4], None),
            ({"x": 4}, None),
            (None, None),
        ],
    )
    def test_parse_point(self, value, expected):
        assert parse_point(value) == expected

    def test_parse_points_string(self):
        assert parse_points("4-4 16-4;(3,3)") == ((4, 4), (16, 4), (3, 3))

    def test_parse_points_skips_unreadable(self):
        assert parse_points([[4, 4], "bad", {"x": 1, "y": 2}]) == ((4, 4), (1, 2))

    @pytest.mark.parametrize("value,expected", [("b", "B"), (" W ", "W"), ("ANY", "any"), ("red", "B"), (None, "B")])
    def test_parse_pattern_color(self, value, expected):
        assert parse_pattern_color(value) == expected


class TestPatternEntry:
    def test_from_dict(self):
        entry = PatternEntry.from_dict({"name": " corner ", "coordinates": [[4, 4], "16-4"], "color": "w"})
        assert entry == PatternEntry("corner", ((4, 4), (16, 4)), "W")

    def test_coords_alias(self):
        assert PatternEntry.from_dict({"name": "c", "coords": "4-4"}).coordinates == ((4, 4),)

    def test_missing_fields(self):
        assert PatternEntry.from_dict({}) == PatternEntry("", (), "B")


class TestGoKifuConfig:
    def test_defaults(self):
        config = GoKifuConfig.from_dict({})
        assert config.sgf_folder is None
        assert config.board_size == 19
        assert config.page_size == 10
        assert config.opening_patterns == ()
        assert config.game_note_folder == "GoKifu/games"
        assert config.review_note_folder == "GoKifu/reviews"
        assert config.output_note == "GoKifu/Show Data.md"
        assert config.lang == "jp"
        assert config.main_line_only is False
        assert config.opening_limit == 7

    def test_plugin_settings_key(self):
        assert GoKifuConfig.from_dict({"sgfFolderPath": " SGF "}).sgf_folder == "SGF"

    def test_sgf_folder_key_wins(self):
        assert GoKifuConfig.from_dict({"sgf_folder": "Kifu", "sgfFolderPath": "SGF"}).sgf_folder == "Kifu"

    def test_invalid_values_fall_back(self):
        config = GoKifuConfig.from_dict(
            {"board_size": 21, "page_size": "30", "lang": "fr", "main_line_only": "maybe", "opening_patterns": "x"}
        )
        assert (config.board_size, config.page_size, config.lang, config.main_line_only) == (19, 10, "jp", False)
        assert config.opening_patterns == ()

    def test_valid_values(self):
        config = GoKifuConfig.from_dict(
            {
                "sgf_folder": "SGF",
                "board_size": "13",
                "page_size": 50,
                "lang": "en-US",
                "main_line_only": "true",
                "opening_patterns": [{"name": "corner", "coordinates": [[4, 4]]}, "ignored"],
            }
        )
        assert config.board_size == 13
        assert config.page_size == 50
        assert config.lang == "en"
        assert config.main_line_only is True
        assert config.opening_patterns == (PatternEntry("corner", ((4, 4),)),)

    def test_to_dict_round_trip(self):
        config = GoKifuConfig.from_dict(
            {"sgf_folder": "SGF", "board_size": 9, "opening_patterns": [{"name": "c", "coordinates": [[3, 3]]}]}
        )
        assert GoKifuConfig.from_dict(config.to_dict()) == config
