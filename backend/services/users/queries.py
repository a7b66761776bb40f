"""Shared user lookups and the summary projection used by listings."""

from __future__ import annotations

from typing import Any, NamedTuple, cast

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased
from sqlalchemy.sql import ColumnElement

from db.expressions import eq
from models import Follow, ProfileImage, User
from services.errors import InvalidArgumentError, NotFoundError
from services.storage import resolve_image_url

from .schemas import UserSummary


def active_user_filter() -> ColumnElement[bool]:
    return cast(ColumnElement[bool], cast(Any, User.deleted_at).is_(None))


async def find_user(
    session: AsyncSession,
    *,
    user_id: str | None = None,
    email: str | None = None,
    nickname: str | None = None,
) -> User | None:
    """Return the active user matching every supplied filter."""
    conditions: list[ColumnElement[bool]] = [active_user_filter()]
    if user_id is not None:
        conditions.append(eq(User.id, user_id))
    if email is not None:
        conditions.append(eq(User.email, email))
    if nickname is not None:
        conditions.append(eq(User.nickname, nickname))
    if len(conditions) == 1:
        raise InvalidArgumentError(
            "At least one of user_id, email or nickname is required",
            reason="missing_user_filter",
        )

    result = await session.execute(select(User).where(*conditions).limit(1))
    return result.scalar_one_or_none()


async def require_user(session: AsyncSession, user_id: str) -> User:
    user = await find_user(session, user_id=user_id)
    if user is None:
        raise NotFoundError("Not Found User", reason="user_not_found")
    return user


def follower_count_column() -> ColumnElement[int]:
    """Active accounts following ``User``."""
    edge = aliased(Follow)
    follower = aliased(User)
    return cast(
        ColumnElement[int],
        select(func.count())
        .select_from(edge)
        .join(follower, eq(follower.id, edge.follower_id))
        .where(
            eq(edge.followee_id, User.id),
            cast(Any, follower.deleted_at).is_(None),
        )
        .correlate(User)
        .scalar_subquery(),
    )


def followee_count_column() -> ColumnElement[int]:
    """Active accounts ``User`` follows."""
    edge = aliased(Follow)
    followee = aliased(User)
    return cast(
        ColumnElement[int],
        select(func.count())
        .select_from(edge)
        .join(followee, eq(followee.id, edge.followee_id))
        .where(
            eq(edge.follower_id, User.id),
            cast(Any, followee.deleted_at).is_(None),
        )
        .correlate(User)
        .scalar_subquery(),
    )


def active_image_key_column() -> ColumnElement[str | None]:
    image = aliased(ProfileImage)
    return cast(
        ColumnElement[str | None],
        select(image.image_key)
        .where(
            eq(image.user_id, User.id),
            cast(Any, image.deleted_at).is_(None),
        )
        .order_by(cast(Any, image.id).desc())
        .limit(1)
        .correlate(User)
        .scalar_subquery(),
    )


def user_summary_select() -> Select[Any]:
    """Select active users with live counts and their active image key."""
    return select(
        User,
        follower_count_column().label("follower_count"),
        followee_count_column().label("followee_count"),
        active_image_key_column().label("image_key"),
    ).where(active_user_filter())


class UserSummaryRow(NamedTuple):
    user: User
    follower_count: int
    followee_count: int
    image_key: str | None


def to_user_summary(row: UserSummaryRow) -> UserSummary:
    user = row.user
    interests = [tag for tag in (user.interest1, user.interest2) if tag]
    return UserSummary(
        id=user.id,
        email=user.email,
        nickname=user.nickname,
        profile=user.profile,
        interests=interests,
        profile_image=resolve_image_url(row.image_key),
        follower_count=int(row.follower_count or 0),
        followee_count=int(row.followee_count or 0),
    )


async def load_user_summaries(
    session: AsyncSession,
    stmt: Select[Any],
) -> list[UserSummary]:
    result = await session.execute(stmt)
    return [
        to_user_summary(UserSummaryRow(user, follower_count, followee_count, image_key))
        for user, follower_count, followee_count, image_key in result.all()
    ]


async def get_user_summary(session: AsyncSession, user_id: str) -> UserSummary:
    summaries = await load_user_summaries(
        session,
        user_summary_select().where(eq(User.id, user_id)).limit(1),
    )
    if not summaries:
        raise NotFoundError("Not Found User", reason="user_not_found")
    return summaries[0]
