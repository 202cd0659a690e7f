"""Win/loss statistics over indexed records.

One linear pass counts games, black wins and white wins overall and per
matched opening pattern. A record matching several patterns contributes to
each of them. Wins are decided by the RE prefix ("B+" / "W+"); draws,
voids and unknown results only count towards the totals.
"""

from __future__ import annotations

from typing import Iterable

from gokifu.core.models import AggregateStats, GameRecord, PatternStats
from gokifu.core.sgf.formatting import format_percentage, winner_color


def _count(stats: PatternStats | AggregateStats, winner: str) -> None:
    stats.total += 1
    if winner == "B":
        stats.black_wins += 1
    elif winner == "W":
        stats.white_wins += 1


def aggregate(records: Iterable[GameRecord]) -> AggregateStats:
    """Aggregate overall and per-pattern win counts.

    Examples:
        >>> aggregate([]).total
        0
    """
    result = AggregateStats()
    for record in records:
        winner = winner_color(record.result_raw)
        _count(result, winner)
        for name in sorted(record.matched_pattern_names):
            _count(result.per_pattern.setdefault(name, PatternStats()), winner)
    return result


def win_rate(wins: int, total: int) -> str:
    """Percentage string with one decimal ("0.0" for an empty slice)."""
    return format_percentage(wins, total)
