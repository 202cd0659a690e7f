"""SGF corpus discovery and file access.

The scanner works against a small file-tree protocol so the core never
touches the filesystem directly. LocalFileTree is the filesystem
implementation used by the Show Data tool; tests use an in-memory tree.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, List, Optional, Protocol, Tuple

import chardet

from gokifu.core.constants import ENCODINGS_TO_TRY, SGF_EXTENSION
from gokifu.core.errors import KifuReadError
from gokifu.core.models import SourceRef

logger = logging.getLogger(__name__)

_CHARSET_RE = re.compile(rb"CA\[(.*?)\]")


class FileTree(Protocol):
    """Minimal file-tree interface the scanner and indexer need.

    Entries are opaque to the core; only the tree interprets them.
    """

    def resolve(self, path: str) -> Optional[Any]:
        """Return the entry at ``path`` (relative to the tree root), or None."""
        ...

    def list_children(self, container: Any) -> List[Any]: ...

    def is_container(self, entry: Any) -> bool: ...

    def extension_of(self, entry: Any) -> str:
        """Extension without the dot, as stored (case preserved)."""
        ...

    def read_text(self, entry: Any) -> str:
        """Decoded file contents. May raise for individual files."""
        ...

    def source_ref(self, entry: Any) -> SourceRef: ...


def scan(tree: FileTree, root_path: str) -> List[Any]:
    """Collect SGF file entries below ``root_path`` (recursive).

    Iterative traversal with a LIFO stack; the returned order is whatever
    the traversal produces and must not be relied upon. Returns [] when
    the root does not resolve to an existing container.
    """
    root = tree.resolve(root_path)
    if root is None or not tree.is_container(root):
        logger.info("SGF root %r is not a folder; nothing to scan", root_path)
        return []

    results: List[Any] = []
    stack: List[Any] = [root]
    while stack:
        current = stack.pop()
        if tree.is_container(current):
            stack.extend(tree.list_children(current))
        elif (tree.extension_of(current) or "").lower() == SGF_EXTENSION:
            results.append(current)
    logger.debug("Scanned %r: %d SGF file(s)", root_path, len(results))
    return results


# =============================================================================
# Encoding detection
# =============================================================================


def _try_decode(raw_bytes: bytes, encoding: str) -> Optional[str]:
    try:
        return raw_bytes.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        return None


def decode_sgf_bytes(raw_bytes: bytes) -> Tuple[str, str]:
    """Decode SGF bytes, returning (text, encoding_used).

    Order: the CA[] charset property, strict UTF-8, chardet detection,
    then the ENCODINGS_TO_TRY chain. latin-1 at the end of the chain
    always succeeds.
    """
    match = _CHARSET_RE.search(raw_bytes)
    if match:
        declared = match.group(1).decode("ascii", errors="ignore").strip()
        if declared:
            text = _try_decode(raw_bytes, declared)
            if text is not None:
                return text, declared
            logger.debug("Declared charset %r failed, detecting", declared)

    text = _try_decode(raw_bytes, "utf-8")
    if text is not None:
        return text, "utf-8"

    detected = chardet.detect(raw_bytes[:4096])["encoding"]
    # workaround for some compatibility issues for Windows-1252 and GB2312 encodings
    if detected in ("Windows-1252", "GB2312"):
        detected = "GBK"
    if detected:
        text = _try_decode(raw_bytes, detected)
        if text is not None:
            return text, detected

    for encoding in ENCODINGS_TO_TRY:
        text = _try_decode(raw_bytes, encoding)
        if text is not None:
            return text, encoding
    return raw_bytes.decode("latin-1"), "latin-1"


class LocalFileTree:
    """FileTree over a directory on disk (the vault root)."""

    def __init__(self, root_dir: str | Path):
        self.root_dir = Path(root_dir)

    def resolve(self, path: str) -> Optional[Path]:
        relative = (path or "").strip().strip("/")
        target = self.root_dir / relative if relative else self.root_dir
        return target if target.exists() else None

    def list_children(self, container: Path) -> List[Path]:
        """Children of ``container``; symlinked folders are not followed."""
        try:
            children = sorted(container.iterdir())
        except OSError as e:
            logger.warning("Cannot list folder %s: %s", container, e)
            return []
        kept = []
        for child in children:
            if child.is_symlink() and child.is_dir():
                logger.debug("Skipping symlinked folder %s", child)
                continue
            kept.append(child)
        return kept

    def is_container(self, entry: Path) -> bool:
        return entry.is_dir()

    def extension_of(self, entry: Path) -> str:
        return entry.suffix[1:] if entry.suffix else ""

    def read_text(self, entry: Path) -> str:
        try:
            raw_bytes = entry.read_bytes()
        except OSError as e:
            raise KifuReadError(
                f"Error reading {entry}: {e}",
                context={"path": str(entry), "exception_type": type(e).__name__},
            ) from e
        text, encoding = decode_sgf_bytes(raw_bytes)
        if encoding != "utf-8":
            logger.debug("Decoded %s as %s", entry.name, encoding)
        return text

    def source_ref(self, entry: Path) -> SourceRef:
        try:
            relative = entry.relative_to(self.root_dir).as_posix()
        except ValueError:
            relative = entry.as_posix()
        return SourceRef(path=relative, name=entry.name)
