# gokifu/common/typed_config/models.py
#
# Frozen dataclass definitions and tolerant type converters for settings.
# Every from_dict() accepts partially missing or mistyped JSON and falls
# back to defaults instead of raising.

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from gokifu.common.locale_utils import InternalLangCode, normalize_lang_code
from gokifu.core.constants import (
    BLACK,
    BOARD_SIZE_CHOICES,
    DEFAULT_BOARD_SIZE,
    DEFAULT_GAME_NOTE_FOLDER,
    DEFAULT_OUTPUT_NOTE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_REVIEW_NOTE_FOLDER,
    OPENING_MOVE_LIMIT,
    PAGE_SIZE_CHOICES,
    PATTERN_COLOR_ANY,
    PATTERN_COLOR_DEFAULT,
    WHITE,
)

# Recognized bool strings
_TRUE_STRINGS = frozenset({"true", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "no"})

# "4-4", "4,4", "(4,4)"
_POINT_RE = re.compile(r"^\(?(-?\d+)[-,:](-?\d+)\)?$")


# =============================================================================
# Helper Functions
# =============================================================================


def safe_int(value: Any, default: int) -> int:
    """int conversion. None/bool/float/unparseable -> default.

    Note:
        bool is a subclass of int but intentionally returns default, and
        float returns default to avoid silent truncation.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def safe_bool(value: Any, default: bool = False) -> bool:
    """bool conversion. Unrecognized strings ("fasle") return default."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lower = value.strip().lower()
        if lower in _TRUE_STRINGS:
            return True
        if lower in _FALSE_STRINGS:
            return False
    return default


def safe_str(value: Any, default: str) -> str:
    """str conversion. None/empty/non-str -> default."""
    if value is None or not isinstance(value, str) or not value:
        return default
    return value


def normalize_path(value: Any) -> str | None:
    """Path normalization. None/empty/whitespace-only/non-str -> None.

    Valid paths are stripped of surrounding whitespace.
    """
    if value is None or not isinstance(value, str):
        return None
    if not value.strip():
        return None
    return value.strip()


def safe_choice(value: Any, choices: tuple[int, ...], default: int) -> int:
    """Int that must be one of ``choices``; anything else -> default."""
    converted = safe_int(value, default)
    return converted if converted in choices else default


def _point_axis(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def parse_point(value: Any) -> tuple[int, int] | None:
    """Parse one configured coordinate.

    Accepts [x, y], (x, y), {"x": x, "y": y} and strings like "4-4" or "4,4".
    Returns None when the value cannot be read as two integers. Range
    checking (positive coordinates) is left to the pattern builder.
    """
    if isinstance(value, dict):
        x, y = value.get("x"), value.get("y")
    elif isinstance(value, (list, tuple)) and len(value) == 2:
        x, y = value
    elif isinstance(value, str):
        match = _POINT_RE.match(value.strip())
        if not match:
            return None
        x, y = match.group(1), match.group(2)
    else:
        return None
    ix, iy = _point_axis(x), _point_axis(y)
    if ix is None or iy is None:
        return None
    return ix, iy


def parse_points(value: Any) -> tuple[tuple[int, int], ...]:
    """Parse a coordinate list; a single string may hold "4-4 16-4" or "4-4;16-4"."""
    if isinstance(value, str):
        items: list[Any] = [part for part in re.split(r"[;\s]+", value) if part]
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        return ()
    points = []
    for item in items:
        point = parse_point(item)
        if point is not None:
            points.append(point)
    return tuple(points)


def parse_pattern_color(value: Any) -> str:
    """Pattern color: "B", "W" or "any". Unrecognized values -> "B"."""
    if not isinstance(value, str):
        return PATTERN_COLOR_DEFAULT
    normalized = value.strip()
    if normalized.lower() == PATTERN_COLOR_ANY:
        return PATTERN_COLOR_ANY
    if normalized.upper() in (BLACK, WHITE):
        return normalized.upper()
    return PATTERN_COLOR_DEFAULT


# =============================================================================
# Dataclasses
# =============================================================================


@dataclass(frozen=True)
class PatternEntry:
    """One configured opening pattern entry (before merging by name).

    Attributes:
        name: Pattern name (entries sharing a name are merged)
        coordinates: 1-based (x, y) points as configured, unvalidated
        color: Stone color the points must be occupied by: "B" (default),
            "W", or "any" (all black or all white)
    """

    name: str
    coordinates: tuple[tuple[int, int], ...] = ()
    color: str = PATTERN_COLOR_DEFAULT

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "PatternEntry":
        coords = d.get("coordinates")
        if coords is None:
            coords = d.get("coords", ())
        return cls(
            name=safe_str(d.get("name"), "").strip(),
            coordinates=parse_points(coords),
            color=parse_pattern_color(d.get("color")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "coordinates": [list(p) for p in self.coordinates],
            "color": self.color,
        }


@dataclass(frozen=True)
class GoKifuConfig:
    """Settings for one Show Data run.

    Thread-safety: Immutable (frozen=True)

    Attributes:
        sgf_folder: SGF root folder relative to the vault (None = not configured)
        board_size: Active board-size filter (one of BOARD_SIZE_CHOICES)
        opening_patterns: Configured pattern entries
        page_size: Initial rows per page (one of PAGE_SIZE_CHOICES)
        game_note_folder: Destination folder for raw-record game notes
        review_note_folder: Destination folder for variation review notes
        output_note: Note that receives the rendered table
        lang: Label language ("jp" or "en")
        main_line_only: Skip variations when extracting the opening

    Note:
        opening_limit is the fixed first-K-plies constant; it is exposed as
        a property and is not read from the settings file.
    """

    sgf_folder: str | None = None
    board_size: int = DEFAULT_BOARD_SIZE
    opening_patterns: tuple[PatternEntry, ...] = field(default_factory=tuple)
    page_size: int = DEFAULT_PAGE_SIZE
    game_note_folder: str = DEFAULT_GAME_NOTE_FOLDER
    review_note_folder: str = DEFAULT_REVIEW_NOTE_FOLDER
    output_note: str = DEFAULT_OUTPUT_NOTE
    lang: InternalLangCode = "jp"
    main_line_only: bool = False

    @property
    def opening_limit(self) -> int:
        return OPENING_MOVE_LIMIT

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "GoKifuConfig":
        """Build from a settings dict; missing keys take defaults.

        ``sgfFolderPath`` (the key written by the Obsidian plugin settings) is
        read as a fallback for ``sgf_folder``.
        """
        folder = d.get("sgf_folder")
        if folder is None:
            folder = d.get("sgfFolderPath")

        raw_patterns = d.get("opening_patterns")
        entries = []
        if isinstance(raw_patterns, list):
            for item in raw_patterns:
                if isinstance(item, dict):
                    entries.append(PatternEntry.from_dict(item))

        return cls(
            sgf_folder=normalize_path(folder),
            board_size=safe_choice(d.get("board_size"), BOARD_SIZE_CHOICES, DEFAULT_BOARD_SIZE),
            opening_patterns=tuple(entries),
            page_size=safe_choice(d.get("page_size"), PAGE_SIZE_CHOICES, DEFAULT_PAGE_SIZE),
            game_note_folder=normalize_path(d.get("game_note_folder")) or DEFAULT_GAME_NOTE_FOLDER,
            review_note_folder=normalize_path(d.get("review_note_folder")) or DEFAULT_REVIEW_NOTE_FOLDER,
            output_note=normalize_path(d.get("output_note")) or DEFAULT_OUTPUT_NOTE,
            lang=normalize_lang_code(safe_str(d.get("lang"), "jp")),
            main_line_only=safe_bool(d.get("main_line_only"), default=False),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe dict (inverse of from_dict)."""
        return {
            "sgf_folder": self.sgf_folder or "",
            "board_size": self.board_size,
            "opening_patterns": [entry.to_dict() for entry in self.opening_patterns],
            "page_size": self.page_size,
            "game_note_folder": self.game_note_folder,
            "review_note_folder": self.review_note_folder,
            "output_note": self.output_note,
            "lang": self.lang,
            "main_line_only": self.main_line_only,
        }
