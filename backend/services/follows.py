"""Follow edges and the directional follow directory."""

from __future__ import annotations

import logging
from enum import Enum
from typing import NamedTuple, cast

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql import ColumnElement

from db.expressions import desc, eq
from models import Follow, User
from services.account_blocks import get_block_state
from services.errors import ConflictError, InvalidArgumentError, NotFoundError
from services.notifications import NotificationType, record_notification
from services.pagination import PageRequest, total_pages
from services.transactions import atomic
from services.users.queries import (
    active_user_filter,
    load_user_summaries,
    require_user,
    user_summary_select,
)
from services.users.schemas import Page, UserSummary

logger = logging.getLogger(__name__)


class FollowDirection(str, Enum):
    FOLLOWERS = "followers"
    FOLLOWEES = "followees"


class _EdgeSides(NamedTuple):
    # Edge column that must equal the page owner's id.
    anchor: InstrumentedAttribute[str]
    # Edge column holding the accounts being returned.
    listed: InstrumentedAttribute[str]


# followers: who follows the user (followee == user); followees: who the user
# follows (follower == user). Count and list queries both derive from here.
_DIRECTION_SIDES: dict[FollowDirection, _EdgeSides] = {
    FollowDirection.FOLLOWERS: _EdgeSides(
        anchor=cast(InstrumentedAttribute[str], Follow.followee_id),
        listed=cast(InstrumentedAttribute[str], Follow.follower_id),
    ),
    FollowDirection.FOLLOWEES: _EdgeSides(
        anchor=cast(InstrumentedAttribute[str], Follow.follower_id),
        listed=cast(InstrumentedAttribute[str], Follow.followee_id),
    ),
}


def parse_direction(value: object) -> FollowDirection:
    try:
        return FollowDirection(value)
    except ValueError as exc:
        raise InvalidArgumentError(
            f"Unsupported follow direction: {value!r}",
            reason="unknown_follow_direction",
        ) from exc


def _direction_predicate(
    direction: FollowDirection,
    user_id: str,
) -> tuple[ColumnElement[bool], ColumnElement[bool]]:
    """Return (edge anchored at user, listed account joins the edge)."""
    sides = _DIRECTION_SIDES[direction]
    return eq(sides.anchor, user_id), eq(sides.listed, User.id)


async def get_follow_page(
    session: AsyncSession,
    user_id: str,
    direction: FollowDirection | str,
    *,
    page: int,
    size: int,
) -> Page[UserSummary]:
    """List followers or followees of ``user_id``, most recent edge first."""
    resolved_direction = parse_direction(direction)
    request = PageRequest(page=page, size=size)
    anchored, joined = _direction_predicate(resolved_direction, user_id)

    count_result = await session.execute(
        select(func.count())
        .select_from(Follow)
        .join(User, joined)
        .where(anchored, active_user_filter())
    )
    total = int(count_result.scalar_one())

    listed_column = _DIRECTION_SIDES[resolved_direction].listed
    users = await load_user_summaries(
        session,
        user_summary_select()
        .join(Follow, joined)
        .where(anchored)
        .order_by(desc(Follow.created_at), desc(listed_column))
        .offset(request.offset)
        .limit(request.size),
    )
    return Page[UserSummary](total_pages=total_pages(total, request.size), items=users)


async def is_following(
    session: AsyncSession,
    *,
    follower_id: str,
    followee_id: str,
) -> bool:
    return await _find_follow(session, follower_id=follower_id, followee_id=followee_id) is not None


async def _find_follow(
    session: AsyncSession,
    *,
    follower_id: str,
    followee_id: str,
) -> Follow | None:
    result = await session.execute(
        select(Follow).where(
            eq(Follow.follower_id, follower_id),
            eq(Follow.followee_id, followee_id),
        )
    )
    return result.scalar_one_or_none()


def _already_following(_error: Exception | None = None) -> ConflictError:
    return ConflictError("Already Following", reason="already_following")


async def follow_user(
    session: AsyncSession,
    *,
    follower_id: str,
    followee_id: str,
) -> Follow:
    """Create a follow edge and the FOLLOW notification in one unit."""
    if follower_id == followee_id:
        raise InvalidArgumentError("Cannot follow yourself", reason="self_follow")

    async with atomic(session, on_conflict=_already_following):
        await require_user(session, follower_id)
        await require_user(session, followee_id)
        block_state = await get_block_state(
            session,
            viewer_id=follower_id,
            target_id=followee_id,
        )
        if block_state.either:
            raise ConflictError("Cannot follow this user", reason="blocked")
        if await _find_follow(session, follower_id=follower_id, followee_id=followee_id):
            raise _already_following()

        follow = Follow(follower_id=follower_id, followee_id=followee_id)
        session.add(follow)
        await session.flush()
        await record_notification(
            session,
            sender_id=follower_id,
            recipient_id=followee_id,
            type=NotificationType.FOLLOW,
        )

    logger.info(
        "User followed",
        extra={"follower_id": follower_id, "followee_id": followee_id},
    )
    return follow


async def unfollow_user(
    session: AsyncSession,
    *,
    follower_id: str,
    followee_id: str,
) -> None:
    async with atomic(session):
        follow = await _find_follow(session, follower_id=follower_id, followee_id=followee_id)
        if follow is None:
            raise NotFoundError("Not Found Follow", reason="follow_not_found")
        await session.delete(follow)
