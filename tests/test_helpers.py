"""Tests for note-name and markdown helpers."""
import pytest

from gokifu.core.helpers import (
    escape_markdown_table_cell,
    format_wiki_link,
    normalize_player_name,
    sanitize_filename,
)


class TestSanitizeFilename:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("game 1", "game_1"),
            ('a<b>c:d"e', "a_b_c_d_e"),
            ("[[link]]#^x", "link____x"),
            ("CON", "_CON_"),
            ("", "unknown"),
            ("...", "unknown"),
            ("本因坊　秀策", "本因坊_秀策"),
        ],
    )
    def test_values(self, name, expected):
        assert sanitize_filename(name) == expected

    def test_truncation(self):
        assert len(sanitize_filename("x" * 300)) == 120


class TestMarkdownHelpers:
    def test_escape_cell(self):
        assert escape_markdown_table_cell("a|b\\c\r\nd") == "a\\|b\\\\c  d"

    def test_wiki_link(self):
        assert format_wiki_link("SGF/a.sgf", "a.sgf") == "[[SGF/a.sgf|a.sgf]]"
        assert format_wiki_link("SGF/a.sgf") == "[[SGF/a.sgf]]"
        assert format_wiki_link("a", "a") == "[[a]]"

    def test_normalize_player_name(self):
        assert normalize_player_name("  Ｌｅｅ　 Sedol ") == "Lee Sedol"
