"""Clipboard history building blocks: clips, in-memory and SQLite history, editor, finder I/O and configuration."""

__version__ = "0.1.0"
__all__ = ["config", "editor", "finder", "history", "manager", "types"]