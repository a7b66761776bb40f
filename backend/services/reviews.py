"""Review interactions: bookmarks, shares, likes and comments."""

from __future__ import annotations

import logging
from typing import Any, cast

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from db.expressions import eq
from models import Comment, Review, ReviewBookmark, ReviewLike, ReviewShare
from services.errors import ConflictError, InvalidArgumentError, NotFoundError
from services.notifications import NotificationType, record_notification
from services.transactions import atomic
from services.users.queries import require_user

MAX_COMMENT_LENGTH = 1000
logger = logging.getLogger(__name__)


async def get_review(session: AsyncSession, review_id: int) -> Review | None:
    result = await session.execute(
        select(Review).where(
            eq(Review.id, review_id),
            cast(ColumnElement[bool], cast(Any, Review.deleted_at).is_(None)),
        )
    )
    return result.scalar_one_or_none()


async def require_review(session: AsyncSession, review_id: int) -> Review:
    review = await get_review(session, review_id)
    if review is None:
        raise NotFoundError("Not Found Review", reason="review_not_found")
    return review


async def create_review(
    session: AsyncSession,
    *,
    author_id: str,
    title: str,
    content: str,
) -> Review:
    async with atomic(session):
        await require_user(session, author_id)
        review = Review(author_id=author_id, title=title, content=content)
        session.add(review)
        await session.flush()
    await session.refresh(review)
    return review


async def _find_edge(
    session: AsyncSession,
    model: Any,
    *,
    user_id: str,
    review_id: int,
) -> Any | None:
    result = await session.execute(
        select(model).where(
            eq(model.user_id, user_id),
            eq(model.review_id, review_id),
        )
    )
    return result.scalar_one_or_none()


def _already_bookmarked(_error: Exception | None = None) -> ConflictError:
    return ConflictError("Already Bookmark", reason="already_bookmarked")


async def bookmark_review(
    session: AsyncSession,
    *,
    user_id: str,
    review_id: int,
) -> ReviewBookmark:
    async with atomic(session, on_conflict=_already_bookmarked):
        await require_review(session, review_id)
        if await _find_edge(session, ReviewBookmark, user_id=user_id, review_id=review_id):
            raise _already_bookmarked()
        bookmark = ReviewBookmark(user_id=user_id, review_id=review_id)
        session.add(bookmark)
        await session.flush()
    return bookmark


async def unbookmark_review(
    session: AsyncSession,
    *,
    user_id: str,
    review_id: int,
) -> None:
    async with atomic(session):
        await require_review(session, review_id)
        bookmark = await _find_edge(
            session,
            ReviewBookmark,
            user_id=user_id,
            review_id=review_id,
        )
        if bookmark is None:
            raise ConflictError("Already Not Bookmark", reason="not_bookmarked")
        await session.delete(bookmark)


def _already_shared(_error: Exception | None = None) -> ConflictError:
    return ConflictError("Already Shared", reason="already_shared")


async def share_review(
    session: AsyncSession,
    *,
    user_id: str,
    review_id: int,
) -> ReviewShare:
    async with atomic(session, on_conflict=_already_shared):
        await require_review(session, review_id)
        if await _find_edge(session, ReviewShare, user_id=user_id, review_id=review_id):
            raise _already_shared()
        share = ReviewShare(user_id=user_id, review_id=review_id)
        session.add(share)
        await session.flush()
    return share


def _already_liked(_error: Exception | None = None) -> ConflictError:
    return ConflictError("Already Like", reason="already_liked")


async def like_review(
    session: AsyncSession,
    *,
    user_id: str,
    review_id: int,
) -> ReviewLike:
    async with atomic(session, on_conflict=_already_liked):
        await require_user(session, user_id)
        review = await require_review(session, review_id)
        if await _find_edge(session, ReviewLike, user_id=user_id, review_id=review_id):
            raise _already_liked()
        like = ReviewLike(user_id=user_id, review_id=review_id)
        session.add(like)
        await session.flush()
        if review.author_id != user_id:
            await record_notification(
                session,
                sender_id=user_id,
                recipient_id=review.author_id,
                type=NotificationType.REVIEW_LIKE,
                review_id=review_id,
            )
    return like


async def unlike_review(
    session: AsyncSession,
    *,
    user_id: str,
    review_id: int,
) -> None:
    async with atomic(session):
        await require_review(session, review_id)
        like = await _find_edge(session, ReviewLike, user_id=user_id, review_id=review_id)
        if like is None:
            raise ConflictError("Already Not Like", reason="not_liked")
        await session.delete(like)


async def create_comment(
    session: AsyncSession,
    *,
    author_id: str,
    review_id: int,
    content: str,
) -> Comment:
    normalized_content = content.strip()
    if not normalized_content or len(normalized_content) > MAX_COMMENT_LENGTH:
        raise InvalidArgumentError(
            f"Comment must be 1-{MAX_COMMENT_LENGTH} characters",
            reason="invalid_comment",
        )

    async with atomic(session):
        await require_user(session, author_id)
        review = await require_review(session, review_id)
        comment = Comment(
            review_id=review_id,
            author_id=author_id,
            content=normalized_content,
        )
        session.add(comment)
        await session.flush()
        if review.author_id != author_id:
            await record_notification(
                session,
                sender_id=author_id,
                recipient_id=review.author_id,
                type=NotificationType.COMMENT,
                review_id=review_id,
                content=normalized_content,
            )

    await session.refresh(comment)
    logger.info(
        "Comment created",
        extra={"comment_id": comment.id, "review_id": review_id},
    )
    return comment
