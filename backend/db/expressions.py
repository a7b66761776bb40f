"""Typed SQL expression helpers shared by service queries."""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy.sql import ColumnElement


def eq(column: Any, value: Any) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column == value)


def desc(column: Any) -> Any:
    return cast(Any, column).desc()


__all__ = ["eq", "desc"]
