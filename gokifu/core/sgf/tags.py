"""Single-value SGF tag extraction.

Pulls the first value of a property such as ``PB`` or ``RE`` out of raw SGF
text without building a game tree. Only the first bracketed value is read;
nested property lists and escaped brackets are not interpreted.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Optional, Pattern

# Keys that the indexer reads from every record
TAG_BOARD_SIZE = "SZ"
TAG_BLACK_PLAYER = "PB"
TAG_WHITE_PLAYER = "PW"
TAG_GAME_NAME = "GN"
TAG_HANDICAP = "HA"
TAG_RESULT = "RE"
TAG_CHARSET = "CA"

# Board size assumed when SZ is absent (SGF FF[4] default for Go)
DEFAULT_SGF_BOARD_SIZE = 19


@lru_cache(maxsize=64)
def _tag_pattern(key: str) -> Pattern[str]:
    # The key must start a property: text start, whitespace, ';', '(' or ']'
    # before it, so SZ[19]PB[...] matches PB but "APB[...]" does not.
    return re.compile(r"(?:^|[;\s(\]])" + re.escape(key) + r"\s*\[([^\]]*)\]")


def extract_tag(raw_text: str, key: str) -> str:
    """Return the trimmed first value of ``key``, or "" if absent.

    Never raises: an unterminated bracket simply does not match.

    Examples:
        >>> extract_tag("(;SZ[19]PB[ Lee Sedol ])", "PB")
        'Lee Sedol'
        >>> extract_tag("(;SZ[19])", "PW")
        ''
    """
    if not raw_text or not key:
        return ""
    match = _tag_pattern(key).search(raw_text)
    return match.group(1).strip() if match else ""


def parse_board_size(raw_value: str, default: Optional[int] = DEFAULT_SGF_BOARD_SIZE) -> Optional[int]:
    """Parse an SZ value ("19" or rectangular "19:19") into an int.

    Rectangular sizes are only accepted when square. Absent values return
    ``default``; malformed values return None.
    """
    value = raw_value.strip()
    if not value:
        return default
    if ":" in value:
        cols, _, rows = value.partition(":")
        if cols.strip() != rows.strip():
            return None
        value = cols.strip()
    try:
        return int(value)
    except ValueError:
        return None
