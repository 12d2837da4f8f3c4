"""Editing engine for text widgets: cursor, selection, keyboard input and undo/redo."""

__version__ = "0.1.0"
__all__ = ["editor", "keys", "layout", "undo"]