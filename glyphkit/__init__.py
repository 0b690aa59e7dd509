"""Layout queries, cursor navigation, undo history and input validation for shaped text."""

__version__ = "0.1.0"

__all__ = ["layout", "types", "undo", "validation"]