"""Pure helper functions for note names and markdown output.

All functions are pure and UI-independent.
"""

from __future__ import annotations

import re
import unicodedata

# Windows reserved filenames
_WINDOWS_RESERVED = {
    "CON",
    "PRN",
    "AUX",
    "NUL",
    *(f"COM{i}" for i in range(1, 10)),
    *(f"LPT{i}" for i in range(1, 10)),
}


def sanitize_filename(name: str, max_length: int = 120) -> str:
    """Sanitize a string for use as a note file name.

    Handles:
        - Invalid characters (<>:"/\\|?*) and wiki-link characters ([]#^)
        - Whitespace normalization
        - Windows reserved names (CON, PRN, NUL, etc.)
        - Empty result fallback
        - Length truncation

    Args:
        name: Name to sanitize
        max_length: Maximum filename length (default 120)

    Returns:
        Safe filename string
    """
    if not name:
        return "unknown"

    safe = re.sub(r'[<>:"/\\|?*\[\]#^]', "_", name)
    # Normalize whitespace (including full-width spaces)
    safe = re.sub(r"\s+", "_", safe)
    safe = safe.strip("._")

    if safe.upper() in _WINDOWS_RESERVED:
        safe = f"_{safe}_"

    if len(safe) > max_length:
        safe = safe[:max_length].rstrip("_")

    # Strip trailing dots and spaces again after truncation (Windows requirement)
    safe = safe.rstrip(". ")

    if not safe:
        return "unknown"

    return safe


def normalize_player_name(name: str) -> str:
    """Normalize a player name for comparison (NFKC, collapsed whitespace)."""
    name = unicodedata.normalize("NFKC", name.strip())
    return " ".join(name.split())


def escape_markdown_table_cell(text: str) -> str:
    """Escape a value for a markdown table cell (pipes and newlines)."""
    return text.replace("\\", "\\\\").replace("|", "\\|").replace("\r", " ").replace("\n", " ")


def format_wiki_link(path: str, label: str | None = None) -> str:
    """Obsidian wiki link ``[[path|label]]``.

    The pipe inside a table cell is escaped by escape_markdown_table_cell
    when the link is rendered into a table.
    """
    if label and label != path:
        return f"[[{path}|{label}]]"
    return f"[[{path}]]"
