#!/usr/bin/env python
"""
Show Data: index an SGF folder and write the statistics table into a note.

The vault is a directory of markdown notes. SGF files live in a folder below
it (the configured SGF folder); game and review notes, and the output note,
are written below it as well.

Usage:
    python -m gokifu --vault ./vault --sgf-folder SGF
    python -m gokifu --vault ./vault --keyword "Lee" --handicap 互戦 --page-size 20
    python -m gokifu --vault ./vault --output -          # print instead of writing
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from gokifu.common.config_store import SettingsStore
from gokifu.common.locale_utils import normalize_lang_code
from gokifu.common.typed_config import GoKifuConfig
from gokifu.core.constants import BOARD_SIZE_CHOICES, HANDICAP_FILTER_ALL, PAGE_SIZE_CHOICES
from gokifu.core.corpus import FileTree, LocalFileTree
from gokifu.core.errors import ConfigError
from gokifu.core.indexer import RecordIndexer
from gokifu.core.models import IndexResult, NoteWriteResult
from gokifu.core.notes import FileNoteStore, NoteMaterializer, NoteStore
from gokifu.core.render import MarkdownRenderSink, render_view
from gokifu.core.view import ViewController, ViewOutput

logger = logging.getLogger(__name__)

SETTINGS_RELATIVE_PATH = os.path.join(".gokifu", "settings.json")

ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "jp": {
        "not_configured": "エラー: 設定の「SGFフォルダ」が未設定です。設定からフォルダを指定してください。",
        "not_found": 'エラー: 指定されたフォルダが見つかりませんでした: "{path}"\n正しいフォルダ名を設定で指定してください。',
    },
    "en": {
        "not_configured": "Error: the SGF folder is not configured. Set a folder in the settings.",
        "not_found": 'Error: the configured folder was not found: "{path}"\nSet a valid folder name in the settings.',
    },
}


@dataclass
class ShowDataResult:
    """Outcome of one Show Data run."""

    markdown: str
    index: IndexResult
    view: ViewOutput
    output_note: Optional[NoteWriteResult] = None
    handicap_options: List[str] = field(default_factory=list)


class ShowDataCommand:
    """Validate settings, index the SGF folder and render the view.

    Args:
        config: Active settings
        tree: File tree holding the SGF folder
        store: Note store for companion notes and the output note
    """

    def __init__(self, config: GoKifuConfig, tree: FileTree, store: NoteStore):
        self.config = config
        self.tree = tree
        self.store = store
        self.materializer = NoteMaterializer(store, config)

    def validate(self) -> str:
        """Return the SGF folder, or raise ConfigError before any file is touched."""
        messages = ERROR_MESSAGES[normalize_lang_code(self.config.lang)]
        folder = (self.config.sgf_folder or "").strip()
        if not folder:
            raise ConfigError("SGF folder is not configured", user_message=messages["not_configured"])
        root = self.tree.resolve(folder)
        if root is None or not self.tree.is_container(root):
            raise ConfigError(
                f"SGF folder not found: {folder}",
                user_message=messages["not_found"].format(path=folder),
                context={"sgf_folder": folder},
            )
        return folder

    def run(
        self,
        keyword: str = "",
        handicap: str = HANDICAP_FILTER_ALL,
        page_size: Optional[int] = None,
        page: int = 1,
    ) -> ShowDataResult:
        folder = self.validate()
        index = RecordIndexer(self.config, self.tree, self.materializer).index(folder)

        controller = ViewController(index.records, self.config)
        if page_size is not None:
            controller.set_page_size(page_size)
        controller.set_handicap_filter(handicap)
        controller.set_keyword(keyword)
        controller.go_to_page(page)

        sink = MarkdownRenderSink()
        render_view(controller, sink)
        return ShowDataResult(
            markdown=sink.to_markdown(),
            index=index,
            view=controller.output,
            handicap_options=controller.handicap_options(),
        )

    def write_output(self, result: ShowDataResult) -> NoteWriteResult:
        """Upsert the rendered markdown into the configured output note."""
        path = self.config.output_note
        folder = path.rpartition("/")[0]
        if folder:
            written = self.materializer.write_note(folder, path, result.markdown, "output_note", path)
        else:
            written = self.materializer.upsert_note(path, result.markdown, "output_note", path)
        result.output_note = written
        return written


# =============================================================================
# CLI
# =============================================================================


def _apply_overrides(settings: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    overrides = {
        "sgf_folder": args.sgf_folder,
        "board_size": args.board_size,
        "lang": args.lang,
    }
    updated = dict(settings)
    for key, value in overrides.items():
        if value is not None:
            updated[key] = value
    return updated


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gokifu",
        description="Index SGF game records and write win/loss statistics into a markdown note",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Index the configured SGF folder of a vault
    python -m gokifu --vault ./vault

    # Configure the SGF folder once and keep it
    python -m gokifu --vault ./vault --sgf-folder SGF --save-settings

    # Filter by opponent and handicap, 20 rows per page, print to stdout
    python -m gokifu --vault ./vault --keyword Lee --handicap 2子 --page-size 20 --output -
""",
    )
    parser.add_argument("--vault", default=".", help="Vault directory (default: current directory)")
    parser.add_argument(
        "--settings",
        default=None,
        help=f"Settings JSON file (default: <vault>/{SETTINGS_RELATIVE_PATH})",
    )
    parser.add_argument("--sgf-folder", default=None, help="SGF folder relative to the vault")
    parser.add_argument("--board-size", type=int, choices=BOARD_SIZE_CHOICES, default=None, help="Board size filter")
    parser.add_argument("--lang", default=None, help="Label language: jp (default) or en")
    parser.add_argument("--keyword", default="", help="Opponent name; exact matches first, then partial")
    parser.add_argument("--handicap", default=HANDICAP_FILTER_ALL, help="Displayed handicap to keep (default: all)")
    parser.add_argument("--page-size", type=int, choices=PAGE_SIZE_CHOICES, default=None, help="Rows per page")
    parser.add_argument("--page", type=int, default=1, help="Page number (clamped)")
    parser.add_argument(
        "--output",
        default=None,
        help="Output note relative to the vault, or '-' for stdout (default: from settings)",
    )
    parser.add_argument("--save-settings", action="store_true", help="Persist --sgf-folder/--board-size/--lang")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings_path = args.settings or os.path.join(args.vault, SETTINGS_RELATIVE_PATH)
    settings_store = SettingsStore(settings_path)
    settings = _apply_overrides(settings_store.load(), args)
    if args.output and args.output != "-":
        settings["output_note"] = args.output
    if args.save_settings:
        persisted = _apply_overrides(settings_store.load(), args)
        settings_store.save(persisted)
        logger.info("Saved settings to %s", settings_path)

    config = GoKifuConfig.from_dict(settings)
    command = ShowDataCommand(config, LocalFileTree(args.vault), FileNoteStore(args.vault))
    try:
        result = command.run(
            keyword=args.keyword,
            handicap=args.handicap,
            page_size=args.page_size,
            page=args.page,
        )
    except ConfigError as e:
        print(e.user_message, file=sys.stderr)
        return 1

    if args.output == "-":
        print(result.markdown, end="")
    else:
        written = command.write_output(result)
        if written.error is not None:
            print(f"Error writing {written.path}: {written.error.message}", file=sys.stderr)
        else:
            print(f"{written.status.value}: {written.path}")

    index = result.index
    print(
        f"Indexed {len(index.records)} game(s) "
        f"(skipped {index.skipped_count}, unreadable {len(index.degraded_files)}, "
        f"notes written {index.notes_written}, note errors {len(index.write_errors)})",
        file=sys.stderr,
    )
    for error in index.write_errors:
        print(f"  {error.file_kind} {error.target_path}: {error.exception_type}: {error.message}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
