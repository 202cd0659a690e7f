"""Rendering of a ViewController page to a paragraph/table sink.

The sink receives plain paragraph strings and one (headers, rows) table.
Re-rendering a table replaces only the most recently rendered table;
paragraphs already emitted stay in place.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from gokifu.core.helpers import escape_markdown_table_cell
from gokifu.core.view import ViewController

PAGER_FORMATS: Dict[str, str] = {
    "jp": "ページ {label}（{count}件）",
    "en": "Page {label} ({count} games)",
}


class RenderSink(Protocol):
    def paragraphs(self, texts: Sequence[str]) -> None: ...

    def table(self, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None: ...


class MarkdownRenderSink:
    """RenderSink that accumulates markdown text."""

    def __init__(self) -> None:
        self._paragraphs: List[str] = []
        self._table: Optional[Tuple[List[str], List[List[str]]]] = None

    def paragraphs(self, texts: Sequence[str]) -> None:
        self._paragraphs.extend(texts)

    def table(self, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        self._table = (list(headers), [list(row) for row in rows])

    @staticmethod
    def table_markdown(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
        lines = [
            "| " + " | ".join(escape_markdown_table_cell(h) for h in headers) + " |",
            "|" + "|".join("---" for _ in headers) + "|",
        ]
        for row in rows:
            lines.append("| " + " | ".join(escape_markdown_table_cell(str(cell)) for cell in row) + " |")
        return "\n".join(lines)

    def to_markdown(self) -> str:
        blocks = list(self._paragraphs)
        if self._table is not None:
            blocks.append(self.table_markdown(*self._table))
        return "\n\n".join(blocks) + "\n"


def pager_paragraph(controller: ViewController) -> str:
    output = controller.output
    return PAGER_FORMATS[controller.lang].format(label=output.pager_label, count=output.filtered_count)


def render_view(controller: ViewController, sink: RenderSink) -> None:
    """Emit the stats block, the pager line and the current page table."""
    sink.paragraphs(controller.stats_paragraphs() + [pager_paragraph(controller)])
    render_page(controller, sink)


def render_page(controller: ViewController, sink: RenderSink) -> None:
    """Emit only the table for the current page (used after a transition)."""
    sink.table(controller.table_headers(), controller.table_rows())
