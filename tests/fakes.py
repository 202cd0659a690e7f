# tests/fakes.py
"""
In-memory collaborators for testing the indexing core without a vault.

Usage:
    from tests.fakes import MemoryFileTree, FakeNoteStore
"""

from pathlib import PurePosixPath
from typing import Dict, List, Optional, Set, Tuple, Union

from gokifu.core.errors import NoteStoreError
from gokifu.core.models import SourceRef


class MemoryFileTree:
    """
    FileTree over a dict of {path: text}.

    Behavior:
    - Folders are implied by the file paths ("SGF/2024/a.sgf" creates "SGF" and "SGF/2024")
    - A value that is an exception instance is raised by read_text()
    - Entries are the "/"-separated path strings themselves
    - read_count records how many read_text() calls were made
    """

    def __init__(self, files: Dict[str, Union[str, Exception]], folders: Tuple[str, ...] = ()):
        self.files = dict(files)
        self.folders: Set[str] = {""}
        for path in list(self.files) + list(folders):
            parts = PurePosixPath(path).parts
            upto = len(parts) - 1 if path in self.files else len(parts)
            for i in range(1, upto + 1):
                self.folders.add("/".join(parts[:i]))
        self.read_count = 0

    def resolve(self, path: str) -> Optional[str]:
        key = (path or "").strip().strip("/")
        if key in self.folders or key in self.files:
            return key
        return None

    def list_children(self, container: str) -> List[str]:
        children = []
        for path in sorted(self.folders | set(self.files)):
            if not path:
                continue
            parent = str(PurePosixPath(path).parent)
            if (parent if parent != "." else "") == container:
                children.append(path)
        return children

    def is_container(self, entry: str) -> bool:
        return entry in self.folders

    def extension_of(self, entry: str) -> str:
        suffix = PurePosixPath(entry).suffix
        return suffix[1:] if suffix else ""

    def read_text(self, entry: str) -> str:
        self.read_count += 1
        value = self.files[entry]
        if isinstance(value, Exception):
            raise value
        return value

    def source_ref(self, entry: str) -> SourceRef:
        return SourceRef(path=entry, name=PurePosixPath(entry).name)


class FakeNoteStore:
    """
    NoteStore backed by a dict, recording every write.

    Behavior:
    - writes lists ("create" | "modify" | "create_folder", path) in call order
    - Paths in fail_paths raise NoteStoreError on create/modify
    - Folders in fail_folders raise NoteStoreError on create_folder
    """

    def __init__(self, notes: Optional[Dict[str, str]] = None):
        self.notes: Dict[str, str] = dict(notes or {})
        self.folders: Set[str] = set()
        self.writes: List[Tuple[str, str]] = []
        self.fail_paths: Set[str] = set()
        self.fail_folders: Set[str] = set()

    @property
    def note_writes(self) -> List[Tuple[str, str]]:
        """Writes excluding folder creation."""
        return [w for w in self.writes if w[0] != "create_folder"]

    def exists(self, path: str) -> bool:
        return path in self.notes or path in self.folders

    def create_folder(self, path: str) -> None:
        if path in self.fail_folders:
            raise NoteStoreError(f"Cannot create folder {path}")
        self.folders.add(path)
        self.writes.append(("create_folder", path))

    def create(self, path: str, text: str) -> None:
        if path in self.fail_paths:
            raise NoteStoreError(f"Cannot create {path}")
        if path in self.notes:
            raise NoteStoreError(f"Note already exists: {path}")
        self.notes[path] = text
        self.writes.append(("create", path))

    def read(self, path: str) -> str:
        if path not in self.notes:
            raise NoteStoreError(f"No such note: {path}")
        return self.notes[path]

    def modify(self, path: str, text: str) -> None:
        if path in self.fail_paths:
            raise NoteStoreError(f"Cannot modify {path}")
        self.notes[path] = text
        self.writes.append(("modify", path))
