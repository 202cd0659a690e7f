"""Interactive view over the record index: filter, sort, paginate.

ViewController owns a mutable ViewState. Every transition recomputes the
whole derived output from the full record set:

    board-size filter -> handicap filter -> opening-pattern filter
    -> statistics -> keyword ranking -> page clamp -> page slice

Recomputing from scratch keeps the output a pure function of
(records, config, state).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from gokifu.common.locale_utils import normalize_lang_code
from gokifu.common.typed_config import GoKifuConfig
from gokifu.core.constants import HANDICAP_FILTER_ALL, PAGE_SIZE_CHOICES
from gokifu.core.helpers import format_wiki_link, normalize_player_name
from gokifu.core.models import AggregateStats, GameRecord, PatternStats
from gokifu.core.patterns import build_patterns
from gokifu.core.sgf.formatting import parse_handicap
from gokifu.core.stats import aggregate, win_rate

# =============================================================================
# Localized labels
# =============================================================================

TABLE_HEADERS: Dict[str, Tuple[str, ...]] = {
    "jp": ("黒番", "白番", "対局内容", "手合い割", "結果", "棋譜(SGFファイル名)"),
    "en": ("Black", "White", "Game", "Handicap", "Result", "Record"),
}

PATTERN_HEADER: Dict[str, str] = {
    "jp": "定石",
    "en": "Patterns",
}

STATS_LINE_FORMATS: Dict[str, str] = {
    "jp": "対局数: {total} / 黒勝ち: {black} ({black_pct}%) / 白勝ち: {white} ({white_pct}%)",
    "en": "Games: {total} / Black wins: {black} ({black_pct}%) / White wins: {white} ({white_pct}%)",
}

PATTERN_LINE_PREFIX: Dict[str, str] = {
    "jp": "【{name}】",
    "en": "[{name}]",
}


@dataclass
class ViewState:
    """Mutable filter/sort/page state of one rendering session."""

    keyword: str = ""
    handicap_filter: str = HANDICAP_FILTER_ALL
    page_size: int = 10
    current_page: int = 1


@dataclass(frozen=True)
class ViewOutput:
    """Everything needed to draw one page."""

    stats: AggregateStats
    rows: Tuple[GameRecord, ...]
    filtered_count: int
    current_page: int
    total_pages: int

    @property
    def has_prev(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def pager_label(self) -> str:
        return f"{self.current_page} / {self.total_pages}"


def total_pages_for(count: int, page_size: int) -> int:
    """max(1, ceil(count / page_size))"""
    return max(1, math.ceil(count / page_size))


def keyword_rank(record: GameRecord, keyword: str) -> int:
    """0: a player name equals the keyword, 1: contains it, 2: neither.

    Comparison is case-insensitive; ``keyword`` must already be normalized.
    """
    names = [normalize_player_name(n).casefold() for n in (record.black_player, record.white_player)]
    if keyword in names:
        return 0
    if any(keyword in name for name in names):
        return 1
    return 2


class ViewController:
    """Stateful filter/sort/paginate controller.

    Args:
        records: Full indexed record set
        config: Active settings (board-size filter, patterns, initial page size, lang)
    """

    def __init__(self, records: Sequence[GameRecord], config: GoKifuConfig):
        self.records = list(records)
        self.config = config
        self.lang = normalize_lang_code(config.lang)
        self.pattern_names = [p.name for p in build_patterns(config.opening_patterns)]
        page_size = config.page_size if config.page_size in PAGE_SIZE_CHOICES else PAGE_SIZE_CHOICES[0]
        self.state = ViewState(page_size=page_size)
        self.output = self.derive()

    # --- transitions ---

    def set_keyword(self, keyword: str) -> ViewOutput:
        self.state.keyword = keyword
        self.state.current_page = 1
        return self.refresh()

    def set_handicap_filter(self, handicap: str) -> ViewOutput:
        self.state.handicap_filter = handicap or HANDICAP_FILTER_ALL
        self.state.current_page = 1
        return self.refresh()

    def set_page_size(self, page_size: int) -> ViewOutput:
        if page_size not in PAGE_SIZE_CHOICES:
            raise ValueError(f"page size must be one of {PAGE_SIZE_CHOICES}, got {page_size!r}")
        self.state.page_size = page_size
        self.state.current_page = 1
        return self.refresh()

    def prev_page(self) -> ViewOutput:
        if self.state.current_page > 1:
            self.state.current_page -= 1
        return self.refresh()

    def next_page(self) -> ViewOutput:
        if self.state.current_page < self.output.total_pages:
            self.state.current_page += 1
        return self.refresh()

    def go_to_page(self, page: int) -> ViewOutput:
        """Jump to ``page``; out-of-range values are clamped."""
        self.state.current_page = page
        return self.refresh()

    def refresh(self) -> ViewOutput:
        self.output = self.derive()
        return self.output

    # --- derivation ---

    def filtered_records(self) -> List[GameRecord]:
        """Board size, handicap and opening-pattern filters (unsorted)."""
        records = [r for r in self.records if r.board_size == self.config.board_size]
        handicap = self.state.handicap_filter
        if handicap and handicap != HANDICAP_FILTER_ALL:
            records = [r for r in records if r.handicap_display == handicap]
        if self.pattern_names:
            wanted = set(self.pattern_names)
            records = [r for r in records if r.matched_pattern_names & wanted]
        return records

    def derive(self) -> ViewOutput:
        """Recompute stats and the current page, clamping current_page."""
        records = self.filtered_records()
        stats = aggregate(records)

        keyword = normalize_player_name(self.state.keyword).casefold()
        if keyword:
            records = sorted(records, key=lambda r: keyword_rank(r, keyword))

        total_pages = total_pages_for(len(records), self.state.page_size)
        self.state.current_page = min(max(1, self.state.current_page), total_pages)
        start = (self.state.current_page - 1) * self.state.page_size
        return ViewOutput(
            stats=stats,
            rows=tuple(records[start : start + self.state.page_size]),
            filtered_count=len(records),
            current_page=self.state.current_page,
            total_pages=total_pages,
        )

    # --- presentation ---

    def handicap_options(self) -> List[str]:
        """Filter choices: "all", then the distinct displayed handicaps, fewest stones first."""
        seen: Dict[str, int] = {}
        for record in self.records:
            if record.board_size == self.config.board_size:
                seen.setdefault(record.handicap_display, parse_handicap(record.handicap_raw))
        return [HANDICAP_FILTER_ALL] + sorted(seen, key=lambda label: (seen[label], label))

    def table_headers(self) -> List[str]:
        headers = list(TABLE_HEADERS[self.lang])
        if self.pattern_names:
            headers.insert(5, PATTERN_HEADER[self.lang])
        return headers

    def table_rows(self) -> List[List[str]]:
        rows = []
        for record in self.output.rows:
            row = [
                record.black_player,
                record.white_player,
                record.game_name,
                record.handicap_display,
                record.result_display,
            ]
            if self.pattern_names:
                row.append(", ".join(n for n in self.pattern_names if n in record.matched_pattern_names))
            row.append(format_wiki_link(record.source_ref.path, record.source_ref.name))
            rows.append(row)
        return rows

    def stats_paragraphs(self) -> List[str]:
        """Overall stats line followed by one line per pattern."""
        lang = self.lang
        stats = self.output.stats
        paragraphs = [_stats_line(lang, stats)]
        for name in self.pattern_names:
            pattern_stats = stats.per_pattern.get(name, PatternStats())
            paragraphs.append(PATTERN_LINE_PREFIX[lang].format(name=name) + " " + _stats_line(lang, pattern_stats))
        return paragraphs


def _stats_line(lang: str, stats: PatternStats | AggregateStats) -> str:
    return STATS_LINE_FORMATS[lang].format(
        total=stats.total,
        black=stats.black_wins,
        black_pct=win_rate(stats.black_wins, stats.total),
        white=stats.white_wins,
        white_pct=win_rate(stats.white_wins, stats.total),
    )
