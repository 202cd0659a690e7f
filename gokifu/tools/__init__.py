"""Command-line entry points (``python -m gokifu``)."""
