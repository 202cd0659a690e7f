"""
Pytest configuration and shared fixtures for GoKifu tests.

This module provides:
- A default configuration pointing at an "SGF" folder
- A three-game corpus (two 19x19 games, one 13x13 game)
- Fake file tree and note store instances
"""

import pytest

from gokifu.common.typed_config import GoKifuConfig, PatternEntry
from tests.fakes import FakeNoteStore, MemoryFileTree
from tests.helpers_sgf import make_sgf


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def config():
    """Default settings with the SGF folder set to "SGF"."""
    return GoKifuConfig(sgf_folder="SGF")


@pytest.fixture
def corner_config():
    """Settings with one opening pattern "corner" at (4, 4)."""
    return GoKifuConfig(
        sgf_folder="SGF",
        opening_patterns=(PatternEntry("corner", ((4, 4),)),),
    )


# ---------------------------------------------------------------------------
# Corpus
# ---------------------------------------------------------------------------

@pytest.fixture
def three_game_files():
    """{19, 19, 13} corpus with results B+R and W+2.5 on the 19x19 games."""
    return {
        "SGF/a.sgf": make_sgf(size=19, black="Lee", white="Cho", result="B+R"),
        "SGF/sub/b.sgf": make_sgf(size=19, black="Cho", white="Lee", handicap="2", result="W+2.5"),
        "SGF/c.sgf": make_sgf(size=13, black="Kim", white="Park", result="B+R"),
    }


@pytest.fixture
def three_game_tree(three_game_files):
    return MemoryFileTree(three_game_files)


@pytest.fixture
def note_store():
    return FakeNoteStore()
