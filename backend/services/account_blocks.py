"""Block edges and the block filter applied to user-facing listings."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar, cast

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from db.expressions import eq
from models import Follow, UserBlock
from services.errors import ConflictError, InvalidArgumentError, NotFoundError
from services.transactions import atomic
from services.users.queries import require_user
from services.users.schemas import BlockAnnotated

AnnotatedT = TypeVar("AnnotatedT", bound=BlockAnnotated)
logger = logging.getLogger(__name__)


def _already_blocked(_error: Exception | None = None) -> ConflictError:
    return ConflictError("Already Blocked", reason="already_blocked")


async def fetch_blocked_ids(
    session: AsyncSession,
    *,
    viewer_id: str,
    candidate_ids: Sequence[str],
) -> set[str]:
    """Return the subset of ``candidate_ids`` the viewer has blocked, in one query."""
    if not candidate_ids:
        return set()
    blocked_id_column = cast(ColumnElement[str], UserBlock.blocked_id)
    result = await session.execute(
        select(blocked_id_column).where(
            eq(UserBlock.blocker_id, viewer_id),
            blocked_id_column.in_(list(dict.fromkeys(candidate_ids))),
        )
    )
    return set(result.scalars().all())


async def annotate_blocked(
    session: AsyncSession,
    viewer_id: str,
    candidates: Sequence[AnnotatedT],
) -> list[AnnotatedT]:
    """Return new records flagged with whether the viewer blocked each one.

    Order and length are preserved; nothing is filtered out. Only the
    viewer's outgoing blocks count.
    """
    if not candidates:
        return []
    blocked_ids = await fetch_blocked_ids(
        session,
        viewer_id=viewer_id,
        candidate_ids=[candidate.id for candidate in candidates],
    )
    return [
        candidate.model_copy(update={"is_blocked": candidate.id in blocked_ids})
        for candidate in candidates
    ]


@dataclass(slots=True)
class BlockState:
    is_blocked: bool
    is_blocked_by: bool

    @property
    def either(self) -> bool:
        return self.is_blocked or self.is_blocked_by


async def get_block_state(
    session: AsyncSession,
    *,
    viewer_id: str,
    target_id: str,
) -> BlockState:
    if viewer_id == target_id:
        return BlockState(is_blocked=False, is_blocked_by=False)

    result = await session.execute(
        select(UserBlock).where(
            or_(
                and_(
                    eq(UserBlock.blocker_id, viewer_id),
                    eq(UserBlock.blocked_id, target_id),
                ),
                and_(
                    eq(UserBlock.blocker_id, target_id),
                    eq(UserBlock.blocked_id, viewer_id),
                ),
            )
        )
    )
    rows = result.scalars().all()
    return BlockState(
        is_blocked=any(row.blocker_id == viewer_id for row in rows),
        is_blocked_by=any(row.blocker_id == target_id for row in rows),
    )


async def _find_block(
    session: AsyncSession,
    *,
    blocker_id: str,
    blocked_id: str,
) -> UserBlock | None:
    result = await session.execute(
        select(UserBlock).where(
            eq(UserBlock.blocker_id, blocker_id),
            eq(UserBlock.blocked_id, blocked_id),
        )
    )
    return result.scalar_one_or_none()


async def block_user(
    session: AsyncSession,
    *,
    blocker_id: str,
    blocked_id: str,
) -> UserBlock:
    """Create a block edge and drop follow edges between the pair."""
    if blocker_id == blocked_id:
        raise InvalidArgumentError("Cannot block yourself", reason="self_block")

    async with atomic(session, on_conflict=_already_blocked):
        await require_user(session, blocked_id)
        if await _find_block(session, blocker_id=blocker_id, blocked_id=blocked_id):
            raise _already_blocked()

        await session.execute(
            delete(Follow).where(
                or_(
                    and_(
                        eq(Follow.follower_id, blocker_id),
                        eq(Follow.followee_id, blocked_id),
                    ),
                    and_(
                        eq(Follow.follower_id, blocked_id),
                        eq(Follow.followee_id, blocker_id),
                    ),
                )
            )
        )
        block = UserBlock(blocker_id=blocker_id, blocked_id=blocked_id)
        session.add(block)
        await session.flush()

    logger.info(
        "User blocked",
        extra={"blocker_id": blocker_id, "blocked_id": blocked_id},
    )
    return block


async def unblock_user(
    session: AsyncSession,
    *,
    blocker_id: str,
    blocked_id: str,
) -> None:
    if blocker_id == blocked_id:
        raise InvalidArgumentError("Cannot unblock yourself", reason="self_block")

    async with atomic(session):
        block = await _find_block(session, blocker_id=blocker_id, blocked_id=blocked_id)
        if block is None:
            raise NotFoundError("Not Found Block", reason="block_not_found")
        await session.delete(block)
