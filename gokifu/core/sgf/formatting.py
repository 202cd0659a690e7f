"""Display formatting for handicap (HA) and result (RE) values.

Labels are localized with the internal language codes "jp" (default) and
"en". Unrecognized inputs are never errors: they fall back to documented
values (even game for handicaps, the raw text for results).
"""

from __future__ import annotations

import math
import re
from typing import Dict

from gokifu.common.locale_utils import normalize_lang_code
from gokifu.core.constants import BLACK_WIN_PREFIX, WHITE_WIN_PREFIX

# =============================================================================
# Localized labels
# =============================================================================

HANDICAP_LABELS: Dict[str, Dict[str, str]] = {
    "jp": {
        "even": "互戦",
        "stones": "{n}子",
    },
    "en": {
        "even": "Even",
        "stones": "{n} stones",
    },
}

COLOR_LABELS: Dict[str, Dict[str, str]] = {
    "jp": {"B": "黒", "W": "白"},
    "en": {"B": "Black", "W": "White"},
}

RESULT_LABELS: Dict[str, Dict[str, str]] = {
    "jp": {
        "R": "{color}中押し勝ち",
        "T": "{color}時間切れ勝ち",
        "F": "{color}反則勝ち",
        "points": "{color}{n}目勝ち",
        "half": "{color}{n}目半勝ち",
    },
    "en": {
        "R": "{color} wins by resignation",
        "T": "{color} wins on time",
        "F": "{color} wins by forfeit",
        "points": "{color} wins by {n} points",
        "half": "{color} wins by {n} and a half points",
    },
}

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_MARGIN_RE = re.compile(r"^\d+(?:\.\d+)?$")


# =============================================================================
# Handicap
# =============================================================================


def parse_handicap(raw: str) -> int:
    """Return the leading integer of an HA value, or 0 if there is none."""
    if not raw:
        return 0
    match = _LEADING_INT_RE.match(raw)
    return int(match.group(1)) if match else 0


def format_handicap(raw: str, lang: str = "jp") -> str:
    """Format an HA value for display.

    Examples:
        >>> format_handicap("")
        '互戦'
        >>> format_handicap("0")
        '互戦'
        >>> format_handicap("4")
        '4子'
        >>> format_handicap("4", lang="en")
        '4 stones'
    """
    labels = HANDICAP_LABELS[normalize_lang_code(lang)]
    stones = parse_handicap(raw)
    if stones == 0:
        return labels["even"]
    return labels["stones"].format(n=stones)


# =============================================================================
# Result
# =============================================================================


def _format_number(value: float) -> str:
    """Render a margin the way it was written, without a trailing ".0"."""
    if value == int(value):
        return str(int(value))
    return repr(value)


def winner_color(raw: str) -> str:
    """Return "B", "W" or "" from the winner prefix of an RE value."""
    value = (raw or "").strip()
    if value.startswith(BLACK_WIN_PREFIX):
        return "B"
    if value.startswith(WHITE_WIN_PREFIX):
        return "W"
    return ""


def format_result(raw: str, lang: str = "jp") -> str:
    """Format an RE value for display.

    ``B+R``/``W+T``/``B+F`` map to resignation/time/forfeit wins, numeric
    margins to point wins, with an exact x.5 margin spelled as a half point.
    Anything else (including an empty or non-numeric margin) is returned
    as received.

    Examples:
        >>> format_result("B+R")
        '黒中押し勝ち'
        >>> format_result("W+3.5")
        '白3目半勝ち'
        >>> format_result("B+2", lang="en")
        'Black wins by 2 points'
        >>> format_result("garbled")
        'garbled'
    """
    if not raw:
        return ""
    value = raw.strip()
    color_key = winner_color(value)
    if not color_key:
        return value

    code = normalize_lang_code(lang)
    labels = RESULT_LABELS[code]
    color = COLOR_LABELS[code][color_key]
    margin = value[len(BLACK_WIN_PREFIX):].strip()

    if margin in ("R", "T", "F"):
        return labels[margin].format(color=color)
    if not _MARGIN_RE.match(margin):
        return value

    number = float(margin)
    if number == int(number):
        return labels["points"].format(color=color, n=int(number))
    whole = math.floor(number)
    if number - whole == 0.5:
        return labels["half"].format(color=color, n=whole)
    return labels["points"].format(color=color, n=_format_number(number))


# =============================================================================
# Percentages
# =============================================================================


def format_percentage(wins: int, total: int) -> str:
    """Win rate with exactly one decimal: round(wins * 1000 / total) / 10.

    Halves round up. Returns "0.0" when total is 0.

    Examples:
        >>> format_percentage(1, 2)
        '50.0'
        >>> format_percentage(1, 3)
        '33.3'
        >>> format_percentage(0, 0)
        '0.0'
    """
    if total <= 0:
        return "0.0"
    tenths = math.floor(wins * 1000 / total + 0.5)
    return f"{tenths / 10:.1f}"
