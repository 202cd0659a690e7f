"""Shared constants for the GoKifu core (no dependencies)."""

from typing import Tuple

# Only the first K plies of the main line are considered for opening patterns.
OPENING_MOVE_LIMIT: int = 7

# Record file extension (compared case-insensitively, without dot)
SGF_EXTENSION: str = "sgf"

# Board sizes selectable as the active filter
BOARD_SIZE_CHOICES: Tuple[int, ...] = (9, 13, 19)
DEFAULT_BOARD_SIZE: int = 19

# Rows per page selectable in the view
PAGE_SIZE_CHOICES: Tuple[int, ...] = (10, 20, 50, 100)
DEFAULT_PAGE_SIZE: int = 10

# Handicap filter value meaning "no filter"
HANDICAP_FILTER_ALL: str = "all"

# Winner prefixes of the RE property
BLACK_WIN_PREFIX: str = "B+"
WHITE_WIN_PREFIX: str = "W+"

# Player colors as they appear in move properties
BLACK: str = "B"
WHITE: str = "W"

# Opening patterns are matched against black stones unless configured otherwise;
# "any" accepts a pattern occupied entirely by either color
PATTERN_COLOR_DEFAULT: str = BLACK
PATTERN_COLOR_ANY: str = "any"

# Default destination folders for companion notes (relative to the vault)
DEFAULT_GAME_NOTE_FOLDER: str = "GoKifu/games"
DEFAULT_REVIEW_NOTE_FOLDER: str = "GoKifu/reviews"
DEFAULT_OUTPUT_NOTE: str = "GoKifu/Show Data.md"

# Common encodings for Go SGF files (Fox/Tygem often use GB18030, Nihon-Kiin uses CP932)
ENCODINGS_TO_TRY: Tuple[str, ...] = (
    "utf-8",
    "utf-8-sig",
    "gb18030",
    "cp932",
    "euc-kr",
    "latin-1",
)
