"""Record indexing: one GameRecord per SGF file of the active board size.

Pipeline per file:
    read text -> SZ filter -> tags -> opening moves -> pattern match
    -> branch points -> display formatting -> GameRecord -> companion notes

A read failure degrades the file to empty text (the record is still
produced and counted); note store failures are collected in the
IndexResult. Neither aborts the run.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from gokifu.common.typed_config import GoKifuConfig
from gokifu.core.corpus import FileTree, scan
from gokifu.core.errors import KifuReadError
from gokifu.core.models import GameRecord, IndexResult, ReadOutcome, SourceRef
from gokifu.core.notes import NoteMaterializer
from gokifu.core.patterns import build_patterns, match_patterns
from gokifu.core.sgf.formatting import format_handicap, format_result
from gokifu.core.sgf.moves import detect_branch_points, extract_opening_moves
from gokifu.core.sgf.tags import (
    TAG_BLACK_PLAYER,
    TAG_BOARD_SIZE,
    TAG_GAME_NAME,
    TAG_HANDICAP,
    TAG_RESULT,
    TAG_WHITE_PLAYER,
    extract_tag,
    parse_board_size,
)

logger = logging.getLogger(__name__)


class RecordIndexer:
    """Builds the in-memory record index for one Show Data run.

    Args:
        config: Active settings (board-size filter, opening patterns, ...)
        tree: File tree the SGF files are read from
        materializer: Companion note writer; None disables note output
    """

    def __init__(self, config: GoKifuConfig, tree: FileTree, materializer: Optional[NoteMaterializer] = None):
        self.config = config
        self.tree = tree
        self.materializer = materializer
        self.patterns = build_patterns(config.opening_patterns)

    def read(self, entry: Any) -> ReadOutcome:
        """Read one file, degrading to empty text on failure."""
        try:
            return ReadOutcome.ok(self.tree.read_text(entry))
        except (KifuReadError, OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s, indexing as empty: %s", entry, e)
            return ReadOutcome.failed(str(e))

    def build_record(self, source_ref: SourceRef, raw_text: str, *, degraded: bool = False) -> Optional[GameRecord]:
        """Parse one record. Returns None when its board size is filtered out.

        A degraded (unreadable) file has no SZ to test and is kept at the
        active board size.
        """
        if degraded:
            board_size: Optional[int] = self.config.board_size
        else:
            board_size = parse_board_size(extract_tag(raw_text, TAG_BOARD_SIZE))
        if board_size != self.config.board_size:
            logger.debug("Skipping %s (board size %s)", source_ref.path, board_size)
            return None

        opening_moves = extract_opening_moves(
            raw_text,
            self.config.opening_limit,
            board_size=board_size,
            main_line_only=self.config.main_line_only,
        )
        handicap_raw = extract_tag(raw_text, TAG_HANDICAP)
        result_raw = extract_tag(raw_text, TAG_RESULT)
        return GameRecord(
            source_ref=source_ref,
            black_player=extract_tag(raw_text, TAG_BLACK_PLAYER),
            white_player=extract_tag(raw_text, TAG_WHITE_PLAYER),
            game_name=extract_tag(raw_text, TAG_GAME_NAME),
            handicap_raw=handicap_raw,
            handicap_display=format_handicap(handicap_raw, self.config.lang),
            result_raw=result_raw,
            result_display=format_result(result_raw, self.config.lang),
            board_size=board_size,
            opening_moves=tuple(opening_moves),
            matched_pattern_names=match_patterns(opening_moves, self.patterns),
            branch_move_numbers=tuple(detect_branch_points(raw_text, board_size=board_size)),
            note_ref=self.materializer.game_note_path(source_ref) if self.materializer and not degraded else None,
        )

    def index_file(self, entry: Any, result: Optional[IndexResult] = None) -> Optional[GameRecord]:
        """Index one file and write its notes, accumulating counters into ``result``.

        Returns None when the file is filtered out by board size.
        """
        result = result if result is not None else IndexResult()
        result.scanned_count += 1
        source_ref = self.tree.source_ref(entry)
        outcome = self.read(entry)
        if outcome.degraded:
            result.degraded_files.append(source_ref.path)

        record = self.build_record(source_ref, outcome.text, degraded=outcome.degraded)
        if record is None:
            result.skipped_count += 1
            return None
        result.records.append(record)

        # an unreadable file must not overwrite its existing game note with an empty block
        if self.materializer is not None and not outcome.degraded:
            for note in self.materializer.materialize(record, outcome.text):
                if note.wrote:
                    result.notes_written += 1
                if note.error is not None:
                    result.write_errors.append(note.error)
        return record

    def index(self, root_path: Optional[str] = None) -> IndexResult:
        """Index every SGF file below ``root_path`` (default: configured folder)."""
        root = root_path if root_path is not None else (self.config.sgf_folder or "")
        entries = scan(self.tree, root)
        logger.info("Indexing %d SGF file(s) under %r (board size %d)", len(entries), root, self.config.board_size)

        result = IndexResult()
        for entry in entries:
            self.index_file(entry, result)

        logger.info(
            "Indexed %d record(s), skipped %d, degraded %d, notes written %d, note errors %d",
            len(result.records),
            result.skipped_count,
            len(result.degraded_files),
            result.notes_written,
            len(result.write_errors),
        )
        return result
