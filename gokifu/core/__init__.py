"""Indexing core for GoKifu.

This package is UI-independent; the CLI in ``gokifu.tools`` composes it.
Import from the submodules directly (``gokifu.common.typed_config`` depends on
``gokifu.core.constants``, so this package stays import-free).

Structure:
    - models.py: GameRecord, AggregateStats, ReadOutcome, WriteError, ...
    - corpus.py: FileTree protocol, scan, LocalFileTree
    - sgf/: tag extraction, opening moves, branch points, label formatting
    - patterns.py: opening pattern matching
    - stats.py: win/loss aggregation
    - indexer.py: RecordIndexer
    - notes.py: companion game/review notes
    - view.py: filter/sort/paginate controller
    - render.py: paragraph/table rendering
"""
