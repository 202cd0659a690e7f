"""Opening move extraction and variation branch detection.

Both functions run on a light tokenizer over the raw SGF text instead of a
full game-tree parse: property values are skipped as opaque bracket blocks
(so parentheses inside comments are not taken as variation delimiters), and
only ``(``, ``)`` and ``B``/``W`` move properties are reported.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from gokifu.core.constants import BLACK, OPENING_MOVE_LIMIT, WHITE
from gokifu.core.models import OpeningMove

# Property identifier followed by one or more bracketed values, or a structural character.
_TOKEN_RE = re.compile(r"([A-Za-z]+)\s*((?:\[(?:[^\]\\]|\\.)*\]\s*)+)|([();])", flags=re.DOTALL)
_VALUE_RE = re.compile(r"\[((?:[^\]\\]|\\.)*)\]", flags=re.DOTALL)
_COORD_RE = re.compile(r"^[a-z]{2}$")

_OPEN = "("
_CLOSE = ")"
_MOVE = "move"


def _iter_events(raw_text: str) -> Iterator[Tuple[str, str, str]]:
    """Yield ("(", "", ""), (")", "", "") and ("move", color, value) in text order."""
    for match in _TOKEN_RE.finditer(raw_text):
        ident, values, structural = match.group(1), match.group(2), match.group(3)
        if structural:
            if structural != ";":
                yield structural, "", ""
            continue
        if ident in (BLACK, WHITE):
            first = _VALUE_RE.search(values)
            yield _MOVE, ident, first.group(1) if first else ""


def parse_coordinate(value: str, board_size: Optional[int] = None) -> Optional[Tuple[int, int]]:
    """Map a two-letter SGF coordinate to 1-based (x, y).

    Returns None for passes ("" or a point off the board, e.g. "tt" on
    19x19 when ``board_size`` is given) and for malformed values.

    Examples:
        >>> parse_coordinate("dd")
        (4, 4)
        >>> parse_coordinate("") is None
        True
        >>> parse_coordinate("tt", board_size=19) is None
        True
    """
    value = value.strip()
    if not _COORD_RE.match(value):
        return None
    x = ord(value[0]) - ord("a") + 1
    y = ord(value[1]) - ord("a") + 1
    if x <= 0 or y <= 0:
        return None
    if board_size is not None and (x > board_size or y > board_size):
        return None
    return x, y


@dataclass
class _Frame:
    ply_at_open: int
    children: int = 0
    off_main_line: bool = False


def extract_opening_moves(
    raw_text: str,
    limit: int = OPENING_MOVE_LIMIT,
    *,
    board_size: Optional[int] = None,
    main_line_only: bool = False,
) -> List[OpeningMove]:
    """Return up to ``limit`` stone placements in text order.

    By default moves are taken left to right regardless of variation
    structure. A record that stores a variation physically before its
    ``limit``-th main-line move therefore yields moves from that variation.
    With ``main_line_only`` every non-first sibling variation (and every
    game after the first in a collection) is skipped.

    Passes and malformed coordinates are skipped without using a slot.
    """
    moves: List[OpeningMove] = []
    if limit <= 0 or not raw_text:
        return moves

    stack: List[_Frame] = []
    roots = 0
    for kind, color, value in _iter_events(raw_text):
        if kind == _OPEN:
            if stack:
                parent = stack[-1]
                parent.children += 1
                off = parent.off_main_line or parent.children > 1
            else:
                off = roots > 0
                roots += 1
            stack.append(_Frame(ply_at_open=len(moves), off_main_line=off))
        elif kind == _CLOSE:
            if stack:
                stack.pop()
        else:
            if main_line_only and stack and stack[-1].off_main_line:
                continue
            coord = parse_coordinate(value, board_size)
            if coord is None:
                continue
            moves.append(OpeningMove(x=coord[0], y=coord[1], color=color))
            if len(moves) >= limit:
                break
    return moves


def detect_branch_points(raw_text: str, *, board_size: Optional[int] = None) -> List[int]:
    """Return the ply count at which each additional sibling variation starts.

    A running ply counter is incremented on every stone placement (passes
    and setup stones do not count). Every ``(`` pushes the current count;
    every ``)`` pops it and rewinds the counter to the popped value, so a
    sibling variation starts from the same ply as its predecessor. Each
    ``(`` that opens the second, third, ... child of a node emits the ply
    count at that moment. An empty result means a single-line record.

    Examples:
        >>> detect_branch_points("(;GM[1];B[pd];W[dp](;B[pp])(;B[dd]))")
        [2]
        >>> detect_branch_points("(;B[pd];W[dp])")
        []
    """
    branches: List[int] = []
    if not raw_text:
        return branches

    stack: List[_Frame] = []
    ply = 0
    for kind, _color, value in _iter_events(raw_text):
        if kind == _OPEN:
            if stack:
                parent = stack[-1]
                parent.children += 1
                if parent.children > 1:
                    branches.append(ply)
            stack.append(_Frame(ply_at_open=ply))
        elif kind == _CLOSE:
            if stack:
                ply = stack.pop().ply_at_open
        elif parse_coordinate(value, board_size) is not None:
            ply += 1
    return branches
