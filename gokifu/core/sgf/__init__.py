"""Lightweight SGF readers used by the indexer.

Structure:
    - tags.py: extract_tag, parse_board_size
    - moves.py: extract_opening_moves, detect_branch_points
    - formatting.py: format_handicap, format_result, format_percentage
"""

from gokifu.core.sgf.formatting import (
    format_handicap,
    format_percentage,
    format_result,
    parse_handicap,
    winner_color,
)
from gokifu.core.sgf.moves import (
    detect_branch_points,
    extract_opening_moves,
    parse_coordinate,
)
from gokifu.core.sgf.tags import (
    extract_tag,
    parse_board_size,
)

__all__ = [
    # tags.py
    "extract_tag",
    "parse_board_size",
    # moves.py
    "extract_opening_moves",
    "detect_branch_points",
    "parse_coordinate",
    # formatting.py
    "format_handicap",
    "format_result",
    "format_percentage",
    "parse_handicap",
    "winner_color",
]
