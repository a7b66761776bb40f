"""Profile mutations for an existing account."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any, cast

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from db.expressions import eq
from models import ProfileImage
from services.errors import ConflictError, InvalidArgumentError
from services.transactions import atomic

from .queries import find_user, get_user_summary, require_user
from .schemas import UserSummary

MAX_INTERESTS = 2
logger = logging.getLogger(__name__)


def _nickname_conflict(_error: Exception | None = None) -> ConflictError:
    return ConflictError("Duplicated Nickname", reason="nickname_taken")


def _normalize_interests(interests: Sequence[str]) -> tuple[str | None, str | None]:
    tags = [tag.strip() for tag in interests if tag and tag.strip()]
    if len(tags) > MAX_INTERESTS:
        raise InvalidArgumentError(
            f"At most {MAX_INTERESTS} interests are allowed",
            reason="too_many_interests",
        )
    padded = tags + [None] * (MAX_INTERESTS - len(tags))
    return padded[0], padded[1]


async def update_profile(
    session: AsyncSession,
    user_id: str,
    *,
    nickname: str,
    profile: str | None = None,
    interests: Sequence[str] | None = None,
) -> UserSummary:
    """Update nickname and optional profile fields.

    ``None`` leaves a field unchanged. Keeping one's own nickname is not a
    conflict; taking another active user's nickname is.
    """
    interest_pair = _normalize_interests(interests) if interests is not None else None

    async with atomic(session, on_conflict=_nickname_conflict):
        user = await require_user(session, user_id)
        holder = await find_user(session, nickname=nickname)
        if holder is not None and holder.id != user.id:
            raise _nickname_conflict()

        user.nickname = nickname
        if profile is not None:
            user.profile = profile
        if interest_pair is not None:
            user.interest1, user.interest2 = interest_pair
        session.add(user)
        await session.flush()

    return await get_user_summary(session, user_id)


def _soft_delete_active_images(user_id: str, deleted_at: datetime) -> Any:
    return (
        update(ProfileImage)
        .where(
            eq(ProfileImage.user_id, user_id),
            cast(Any, ProfileImage.deleted_at).is_(None),
        )
        .values(deleted_at=deleted_at)
        .execution_options(synchronize_session=False)
    )


async def update_profile_image(
    session: AsyncSession,
    user_id: str,
    image_key: str,
) -> UserSummary:
    """Swap the active profile image: retire old rows and insert the new one."""
    normalized_key = image_key.strip()
    if not normalized_key:
        raise InvalidArgumentError("image_key must not be empty", reason="invalid_image_key")

    async with atomic(session):
        await require_user(session, user_id)
        await session.execute(
            _soft_delete_active_images(user_id, datetime.now(timezone.utc))
        )
        session.add(ProfileImage(user_id=user_id, image_key=normalized_key))

    logger.info(
        "Profile image replaced",
        extra={"user_id": user_id, "image_key": normalized_key},
    )
    return await get_user_summary(session, user_id)


async def delete_profile_image(session: AsyncSession, user_id: str) -> None:
    async with atomic(session):
        await require_user(session, user_id)
        await session.execute(
            _soft_delete_active_images(user_id, datetime.now(timezone.utc))
        )


async def delete_user(session: AsyncSession, user_id: str) -> None:
    """Soft-delete the account; later lookups never return it."""
    async with atomic(session):
        user = await require_user(session, user_id)
        user.deleted_at = datetime.now(timezone.utc)
        session.add(user)
    logger.info("User soft-deleted", extra={"user_id": user_id})
