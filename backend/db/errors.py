"""Database error helpers."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION_SQLSTATE = "23505"


def _original_message(error: IntegrityError) -> str:
    return str(getattr(error, "orig", None) or error).lower()


def is_unique_violation(error: IntegrityError) -> bool:
    """Return True when the IntegrityError indicates a unique-constraint conflict."""
    original = getattr(error, "orig", None)
    sqlstate = getattr(original, "sqlstate", None) or getattr(original, "pgcode", None)
    if sqlstate == UNIQUE_VIOLATION_SQLSTATE:
        return True
    message = _original_message(error)
    return "duplicate key" in message or "unique constraint" in message


def violates_column(error: IntegrityError, column: str) -> bool:
    """Best-effort check whether a unique violation mentions the given column.

    PostgreSQL reports the index name, SQLite reports ``table.column``; both
    include the column name for the indexes defined in this project.
    """
    return column.lower() in _original_message(error)


__all__ = ["is_unique_violation", "violates_column"]
