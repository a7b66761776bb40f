"""User-facing listings composed with the block filter."""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from db.expressions import desc, eq
from models import User, UserBlock
from services.account_blocks import annotate_blocked
from services.errors import InvalidArgumentError
from services.follows import FollowDirection, get_follow_page
from services.pagination import PageRequest, total_pages

from .queries import (
    active_user_filter,
    find_user,
    get_user_summary,
    load_user_summaries,
    require_user,
    user_summary_select,
)
from .schemas import Page, UserSummary

MIN_SEARCH_LENGTH = 2
MAX_SEARCH_LENGTH = 100
MIN_NICKNAME_LENGTH = 2
MAX_NICKNAME_LENGTH = 16


async def get_user_profile(
    session: AsyncSession,
    viewer_id: str,
    user_id: str,
) -> UserSummary:
    summary = await get_user_summary(session, user_id)
    annotated = await annotate_blocked(session, viewer_id, [summary])
    return annotated[0]


async def get_user_follow_page(
    session: AsyncSession,
    viewer_id: str,
    user_id: str,
    direction: FollowDirection | str,
    *,
    page: int,
    size: int,
) -> Page[UserSummary]:
    await require_user(session, user_id)
    follow_page = await get_follow_page(
        session,
        user_id,
        direction,
        page=page,
        size=size,
    )
    users = await annotate_blocked(session, viewer_id, follow_page.items)
    return Page[UserSummary](total_pages=follow_page.total_pages, items=users)


def _nickname_contains(keyword: str) -> ColumnElement[bool]:
    lowered_nickname = cast(Any, func.lower(cast(Any, User.nickname)))
    return cast(
        ColumnElement[bool],
        lowered_nickname.contains(keyword.lower(), autoescape=True),
    )


async def search_users(
    session: AsyncSession,
    viewer_id: str,
    keyword: str,
    *,
    page: int,
    size: int,
) -> Page[UserSummary]:
    """Case-insensitive nickname search, newest accounts first."""
    term = keyword.strip()
    if not MIN_SEARCH_LENGTH <= len(term) <= MAX_SEARCH_LENGTH:
        raise InvalidArgumentError(
            f"Search keyword must be {MIN_SEARCH_LENGTH}-{MAX_SEARCH_LENGTH} characters",
            reason="invalid_search_keyword",
        )
    request = PageRequest(page=page, size=size)
    matches = _nickname_contains(term)

    count_result = await session.execute(
        select(func.count()).select_from(User).where(active_user_filter(), matches)
    )
    total = int(count_result.scalar_one())

    users = await load_user_summaries(
        session,
        user_summary_select()
        .where(matches)
        .order_by(desc(User.serial_number))
        .offset(request.offset)
        .limit(request.size),
    )
    annotated = await annotate_blocked(session, viewer_id, users)
    return Page[UserSummary](total_pages=total_pages(total, request.size), items=annotated)


async def list_blocked_users(
    session: AsyncSession,
    blocker_id: str,
    *,
    page: int,
    size: int,
) -> Page[UserSummary]:
    request = PageRequest(page=page, size=size)
    joined = eq(UserBlock.blocked_id, User.id)
    blocker_filter = eq(UserBlock.blocker_id, blocker_id)

    count_result = await session.execute(
        select(func.count())
        .select_from(UserBlock)
        .join(User, joined)
        .where(blocker_filter, active_user_filter())
    )
    total = int(count_result.scalar_one())

    users = await load_user_summaries(
        session,
        user_summary_select()
        .join(UserBlock, joined)
        .where(blocker_filter)
        .order_by(desc(UserBlock.created_at), desc(UserBlock.blocked_id))
        .offset(request.offset)
        .limit(request.size),
    )
    annotated = await annotate_blocked(session, blocker_id, users)
    return Page[UserSummary](total_pages=total_pages(total, request.size), items=annotated)


async def is_nickname_available(session: AsyncSession, nickname: str) -> bool:
    normalized = nickname.strip()
    if not MIN_NICKNAME_LENGTH <= len(normalized) <= MAX_NICKNAME_LENGTH:
        raise InvalidArgumentError(
            f"Nickname must be {MIN_NICKNAME_LENGTH}-{MAX_NICKNAME_LENGTH} characters",
            reason="invalid_nickname",
        )
    return await find_user(session, nickname=normalized) is None
