"""GoKifu: SGF game-record indexing and statistics for a markdown vault."""

__version__ = "0.1.0"
