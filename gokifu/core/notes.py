"""Companion note materialization.

For every indexed record a game note holding the raw SGF in a fenced block
is created or updated, and for records with variations a review note with
one section per branch point. Writes are idempotent: a note is only
modified when its computed body differs from the stored one. Note store
failures are returned as NoteWriteResult/WriteError values so that one
failing record never stops the run.
"""

from __future__ import annotations

import hashlib
import logging
import re
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional, Protocol

from gokifu.common.locale_utils import normalize_lang_code
from gokifu.common.typed_config import GoKifuConfig
from gokifu.core.errors import NoteStoreError
from gokifu.core.helpers import sanitize_filename
from gokifu.core.models import (
    GameRecord,
    NoteWriteResult,
    NoteWriteStatus,
    SourceRef,
    WriteError,
)

logger = logging.getLogger(__name__)

NOTE_EXTENSION = ".md"
SECTION_SEPARATOR = "\n\n---\n\n"

REVIEW_HEADINGS: Dict[str, str] = {
    "jp": "## {n}手目からの変化",
    "en": "## Variation after move {n}",
}


class NoteStore(Protocol):
    """Note create/update primitives (paths are vault-relative, "/"-separated)."""

    def exists(self, path: str) -> bool: ...

    def create_folder(self, path: str) -> None: ...

    def create(self, path: str, text: str) -> None: ...

    def read(self, path: str) -> str: ...

    def modify(self, path: str, text: str) -> None: ...


class FileNoteStore:
    """NoteStore writing markdown files below a vault directory.

    All failures are raised as NoteStoreError.
    """

    def __init__(self, vault_dir: str | Path):
        self.vault_dir = Path(vault_dir)

    def _target(self, path: str) -> Path:
        return self.vault_dir / PurePosixPath(path)

    def exists(self, path: str) -> bool:
        return self._target(path).exists()

    def create_folder(self, path: str) -> None:
        try:
            self._target(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise NoteStoreError(f"Cannot create folder {path}: {e}", context={"path": path}) from e

    def create(self, path: str, text: str) -> None:
        target = self._target(path)
        if target.exists():
            raise NoteStoreError(f"Note already exists: {path}", context={"path": path})
        self._write(target, path, text)

    def read(self, path: str) -> str:
        try:
            with open(self._target(path), encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise NoteStoreError(f"Cannot read note {path}: {e}", context={"path": path}) from e

    def modify(self, path: str, text: str) -> None:
        self._write(self._target(path), path, text)

    @staticmethod
    def _write(target: Path, path: str, text: str) -> None:
        try:
            with open(target, "w", encoding="utf-8", newline="") as f:
                f.write(text)
        except (OSError, UnicodeEncodeError) as e:
            raise NoteStoreError(f"Cannot write note {path}: {e}", context={"path": path}) from e


# =============================================================================
# Note bodies
# =============================================================================


def render_game_note(raw_text: str) -> str:
    """Game note body: the trimmed raw record in an ``sgf`` fenced block.

    The fence is longer than any backtick run inside the record.
    """
    text = raw_text.strip()
    longest = max((len(run) for run in re.findall(r"`+", text)), default=0)
    fence = "`" * max(3, longest + 1)
    return f"{fence}sgf\n{text}\n{fence}\n"


def render_review_note(record: GameRecord, lang: str = "jp") -> str:
    """Review note body: one section per branch point, separated by rules.

    Each section embeds a reference to the source record at that ply.
    """
    heading = REVIEW_HEADINGS[normalize_lang_code(lang)]
    sections = []
    for move_number in record.branch_move_numbers:
        sections.append(
            f"{heading.format(n=move_number)}\n\n"
            f"```sgf-review\n"
            f"file: {record.source_ref.path}\n"
            f"move: {move_number}\n"
            f"```"
        )
    return SECTION_SEPARATOR.join(sections) + "\n"


# =============================================================================
# Materializer
# =============================================================================


class NoteMaterializer:
    """Creates/updates game and review notes for indexed records."""

    def __init__(self, store: NoteStore, config: GoKifuConfig):
        self.store = store
        self.config = config
        self._ensured_folders: set[str] = set()

    # --- paths ---

    def note_name(self, source_ref: SourceRef) -> str:
        """Note file name derived from the path below the SGF folder.

        Flattening sub-folders and sanitizing are lossy, so a name that
        differs from the relative path gets a short hash of that path.
        """
        path = PurePosixPath(source_ref.path)
        root = self.config.sgf_folder.strip("/") if self.config.sgf_folder else ""
        if root:
            try:
                path = path.relative_to(root)
            except ValueError:
                pass
        rel = path.with_suffix("").as_posix()
        name = sanitize_filename(rel.replace("/", "_"))
        if name != rel:
            name = f"{name}_{hashlib.md5(rel.encode('utf-8')).hexdigest()[:6]}"
        return name + NOTE_EXTENSION

    def game_note_path(self, source_ref: SourceRef) -> str:
        return f"{self.config.game_note_folder.rstrip('/')}/{self.note_name(source_ref)}"

    def review_note_path(self, source_ref: SourceRef) -> str:
        return f"{self.config.review_note_folder.rstrip('/')}/{self.note_name(source_ref)}"

    # --- primitives ---

    def ensure_folder(self, folder: str, sgf_id: str) -> Optional[WriteError]:
        """Create ``folder`` if missing. Returns a WriteError on failure."""
        if folder in self._ensured_folders:
            return None
        try:
            if not self.store.exists(folder):
                self.store.create_folder(folder)
        except (NoteStoreError, OSError) as e:
            logger.warning("Cannot create note folder %s: %s", folder, e)
            return WriteError(
                file_kind="folder",
                sgf_id=sgf_id,
                target_path=folder,
                exception_type=type(e).__name__,
                message=str(e),
            )
        self._ensured_folders.add(folder)
        return None

    def upsert_note(self, path: str, body: str, file_kind: str, sgf_id: str) -> NoteWriteResult:
        """Create the note, or modify it only when the body changed."""
        try:
            if not self.store.exists(path):
                self.store.create(path, body)
                logger.debug("Created %s", path)
                return NoteWriteResult(path=path, status=NoteWriteStatus.CREATED)
            if self.store.read(path) == body:
                return NoteWriteResult(path=path, status=NoteWriteStatus.UNCHANGED)
            self.store.modify(path, body)
            logger.debug("Updated %s", path)
            return NoteWriteResult(path=path, status=NoteWriteStatus.MODIFIED)
        except (NoteStoreError, OSError) as e:
            logger.warning("Failed to write %s for %s: %s", file_kind, sgf_id, e)
            return NoteWriteResult(
                path=path,
                status=NoteWriteStatus.FAILED,
                error=WriteError(
                    file_kind=file_kind,
                    sgf_id=sgf_id,
                    target_path=path,
                    exception_type=type(e).__name__,
                    message=str(e),
                ),
            )

    def write_note(self, folder: str, path: str, body: str, file_kind: str, sgf_id: str) -> NoteWriteResult:
        folder_error = self.ensure_folder(folder, sgf_id)
        if folder_error is not None:
            return NoteWriteResult(path=path, status=NoteWriteStatus.FAILED, error=folder_error)
        return self.upsert_note(path, body, file_kind, sgf_id)

    # --- entry point ---

    def materialize(self, record: GameRecord, raw_text: str) -> List[NoteWriteResult]:
        """Upsert the game note, plus the review note when the record branches."""
        sgf_id = record.source_ref.path
        results = [
            self.write_note(
                self.config.game_note_folder.rstrip("/"),
                record.note_ref or self.game_note_path(record.source_ref),
                render_game_note(raw_text),
                "game_note",
                sgf_id,
            )
        ]
        if record.branch_move_numbers:
            results.append(
                self.write_note(
                    self.config.review_note_folder.rstrip("/"),
                    self.review_note_path(record.source_ref),
                    render_review_note(record, self.config.lang),
                    "review_note",
                    sgf_id,
                )
            )
        return results
