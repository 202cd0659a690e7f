"""GoKifu data models.

This module contains dataclasses for indexed game records, aggregate
statistics and the per-operation outcomes of an indexing run.
All classes are UI-independent and can be used in headless contexts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple


@dataclass(frozen=True)
class SourceRef:
    """Reference to the SGF file backing a record.

    Attributes:
        path: Path of the file relative to the file tree root (POSIX separators)
        name: Display name (file name with extension)
    """

    path: str
    name: str

    @property
    def stem(self) -> str:
        """File name without extension."""
        base, dot, _ext = self.name.rpartition(".")
        return base if dot else self.name


@dataclass(frozen=True)
class OpeningMove:
    """One stone placement of the opening.

    Attributes:
        x: 1-based column ("a" -> 1)
        y: 1-based row ("a" -> 1)
        color: "B" or "W"
    """

    x: int
    y: int
    color: str

    @property
    def point(self) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class GameRecord:
    """Structured metadata of one indexed game (immutable once built)."""

    source_ref: SourceRef
    black_player: str = ""
    white_player: str = ""
    game_name: str = ""
    handicap_raw: str = ""
    handicap_display: str = ""
    result_raw: str = ""
    result_display: str = ""
    board_size: int = 0
    opening_moves: Tuple[OpeningMove, ...] = ()
    matched_pattern_names: FrozenSet[str] = frozenset()
    branch_move_numbers: Tuple[int, ...] = ()
    note_ref: Optional[str] = None

    @property
    def has_variations(self) -> bool:
        return bool(self.branch_move_numbers)


@dataclass
class PatternStats:
    """Win/loss counters for one slice of records."""

    total: int = 0
    black_wins: int = 0
    white_wins: int = 0


@dataclass
class AggregateStats:
    """Overall counters plus one PatternStats per matched opening pattern.

    Invariant: black_wins + white_wins <= total (draws and unscored games
    only count towards total).
    """

    total: int = 0
    black_wins: int = 0
    white_wins: int = 0
    per_pattern: Dict[str, PatternStats] = field(default_factory=dict)


@dataclass(frozen=True)
class ReadOutcome:
    """Result of reading one SGF file: ok, or degraded to empty text.

    Attributes:
        text: Decoded file contents ("" when degraded)
        error: Error message when the read failed, else None
        encoding: Encoding used for decoding ("" when degraded)
    """

    text: str
    error: Optional[str] = None
    encoding: str = ""

    @property
    def degraded(self) -> bool:
        return self.error is not None

    @classmethod
    def ok(cls, text: str, encoding: str = "") -> "ReadOutcome":
        return cls(text=text, encoding=encoding)

    @classmethod
    def failed(cls, error: str) -> "ReadOutcome":
        return cls(text="", error=error)


@dataclass
class WriteError:
    """Structured error entry for note store failures.

    Attributes:
        file_kind: Type of note ("folder", "game_note", "review_note")
        sgf_id: Source SGF path (for error reporting)
        target_path: Attempted note/folder path
        exception_type: Exception class name (e.g., "PermissionError")
        message: Error message
    """

    file_kind: str
    sgf_id: str
    target_path: str
    exception_type: str
    message: str


class NoteWriteStatus(Enum):
    CREATED = "created"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass(frozen=True)
class NoteWriteResult:
    """Outcome of one note upsert."""

    path: str
    status: NoteWriteStatus
    error: Optional[WriteError] = None

    @property
    def wrote(self) -> bool:
        return self.status in (NoteWriteStatus.CREATED, NoteWriteStatus.MODIFIED)


@dataclass
class IndexResult:
    """Result of one indexing run.

    Attributes:
        records: Indexed records (board size matches the active filter)
        scanned_count: Number of candidate files visited
        skipped_count: Number of files discarded by the board-size filter
        degraded_files: Source paths whose read failed (indexed as empty text)
        notes_written: Number of notes created or modified
        write_errors: Structured note store errors
    """

    records: List[GameRecord] = field(default_factory=list)
    scanned_count: int = 0
    skipped_count: int = 0
    degraded_files: List[str] = field(default_factory=list)
    notes_written: int = 0
    write_errors: List[WriteError] = field(default_factory=list)
