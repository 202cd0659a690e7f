"""Opening pattern matching.

An opening pattern is a named set of board points with a stone color. A game
matches a pattern when every point of the pattern is occupied within the
first K plies, all of those stones have the same color, and that color is
the pattern's color ("B" by default; "any" accepts all-black or all-white).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Sequence, Tuple

from gokifu.common.typed_config import PatternEntry
from gokifu.core.constants import PATTERN_COLOR_ANY, PATTERN_COLOR_DEFAULT
from gokifu.core.models import OpeningMove

logger = logging.getLogger(__name__)

Point = Tuple[int, int]


@dataclass(frozen=True)
class OpeningPattern:
    """A named, non-empty set of 1-based points."""

    name: str
    coordinates: FrozenSet[Point]
    color: str = PATTERN_COLOR_DEFAULT


def build_patterns(entries: Iterable[PatternEntry]) -> List[OpeningPattern]:
    """Merge configured entries by name and drop invalid points.

    Entries sharing a name are merged (union of coordinates), in order of
    first appearance; the first entry's color is kept. Points with either
    axis <= 0 are dropped; a pattern left with no valid points, or without
    a name, is dropped.
    """
    merged: Dict[str, set] = {}
    colors: Dict[str, str] = {}
    for entry in entries:
        if not entry.name:
            logger.warning("Ignoring opening pattern entry without a name: %s", entry.coordinates)
            continue
        points = merged.setdefault(entry.name, set())
        color = colors.setdefault(entry.name, entry.color)
        if entry.color != color:
            logger.warning("Opening pattern %r: color %r ignored, keeping %r", entry.name, entry.color, color)
        for x, y in entry.coordinates:
            if x <= 0 or y <= 0:
                logger.debug("Dropping invalid point (%d, %d) from pattern %r", x, y, entry.name)
                continue
            points.add((x, y))

    patterns = []
    for name, points in merged.items():
        if not points:
            logger.warning("Opening pattern %r has no valid coordinates; skipped", name)
            continue
        patterns.append(OpeningPattern(name=name, coordinates=frozenset(points), color=colors[name]))
    return patterns


def _occupant_colors(opening_moves: Sequence[OpeningMove]) -> Dict[Point, str]:
    colors: Dict[Point, str] = {}
    for move in opening_moves:
        # first stone on a point wins; a later recapture does not recolor it
        colors.setdefault(move.point, move.color)
    return colors


def match_patterns(opening_moves: Sequence[OpeningMove], patterns: Iterable[OpeningPattern]) -> FrozenSet[str]:
    """Return the names of all patterns the opening satisfies.

    Patterns are evaluated independently; zero, one or several may match.
    """
    colors = _occupant_colors(opening_moves)
    matched = set()
    for pattern in patterns:
        if not pattern.coordinates:
            continue
        occupants = {colors.get(point) for point in pattern.coordinates}
        if None in occupants or len(occupants) != 1:
            continue
        if pattern.color != PATTERN_COLOR_ANY and occupants != {pattern.color}:
            continue
        matched.add(pattern.name)
    return frozenset(matched)
