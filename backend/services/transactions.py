"""Atomic-unit helper bound to an explicit session handle."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from db.errors import is_unique_violation

from .errors import ConflictError


def _default_conflict(_error: IntegrityError) -> ConflictError:
    return ConflictError("Conflict", reason="duplicate")


@asynccontextmanager
async def atomic(
    session: AsyncSession,
    *,
    on_conflict: Callable[[IntegrityError], ConflictError] = _default_conflict,
) -> AsyncIterator[AsyncSession]:
    """Commit the enclosed work as one unit; roll back on any error.

    Unique-constraint violations surfacing at flush or commit become
    ``ConflictError``; every other error propagates unchanged.
    """
    try:
        yield session
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        if is_unique_violation(exc):
            raise on_conflict(exc) from exc
        raise
    except BaseException:
        await session.rollback()
        raise


__all__ = ["atomic"]
