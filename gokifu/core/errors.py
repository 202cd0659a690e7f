"""
GoKifu exception hierarchy.

Provides a base exception class with user-facing messages and debug context,
plus specialized subclasses for the three recoverable-or-not error domains
of an indexing run.
"""

from typing import Any, Dict, Optional


class GoKifuError(Exception):
    """Base exception for GoKifu errors.

    Attributes:
        user_message: Safe, user-facing error message.
        context: Dictionary of debug information.
    """

    def __init__(
        self,
        message: str,
        *,
        user_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.user_message = user_message or message
        self.context = context or {}


class ConfigError(GoKifuError):
    """Missing or unresolvable configuration (SGF folder not set / not found).

    This is the only error that aborts a Show Data run.
    """

    pass


class KifuReadError(GoKifuError):
    """A single SGF file could not be read or decoded."""

    pass


class NoteStoreError(GoKifuError):
    """Folder creation or note create/modify failed."""

    pass
