"""Multi-line text-editing engine: layout queries, undo history and key handling."""

__all__ = ["layout", "undo", "editor"]