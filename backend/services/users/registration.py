"""Account creation for local sign-up and OAuth linking."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core import hash_password, settings
from db.errors import violates_column
from models import ProfileImage, User
from services.errors import ConflictError, InvalidArgumentError, UnauthorizedError
from services.transactions import atomic

from .email_verification import (
    delete_verification_record,
    ensure_aware,
    get_verification_record,
    normalize_email,
)
from .queries import find_user, get_user_summary
from .schemas import UserSummary

logger = logging.getLogger(__name__)


def default_nickname(serial_number: int) -> str:
    return f"{serial_number}{settings.default_nickname_suffix}"


def _email_conflict() -> ConflictError:
    return ConflictError("Email Duplicated", reason="email_taken")


def _nickname_conflict() -> ConflictError:
    return ConflictError("Duplicated Nickname", reason="nickname_taken")


def _registration_conflict(error: IntegrityError) -> ConflictError:
    if violates_column(error, "nickname"):
        return _nickname_conflict()
    return _email_conflict()


async def create_local_user(
    session: AsyncSession,
    *,
    email: str,
    password: str,
    password_confirmation: str,
) -> UserSummary:
    """Register an account for an email whose verification is fresh.

    Lookup, insert and default-nickname assignment run in one unit, and the
    verification record is consumed in the same unit.
    """
    if password != password_confirmation:
        raise InvalidArgumentError(
            "Password confirmation does not match",
            reason="password_mismatch",
        )

    normalized_email = normalize_email(email)
    password_hash = await asyncio.to_thread(hash_password, password)
    ttl = timedelta(minutes=settings.email_verification_ttl_minutes)

    async with atomic(session, on_conflict=_registration_conflict):
        record = await get_verification_record(
            session,
            normalized_email,
            lock_for_update=True,
        )
        if await find_user(session, email=normalized_email) is not None:
            raise _email_conflict()
        if record is None or not record.is_verified:
            raise UnauthorizedError("Unauthorized Email", reason="email_not_verified")
        if datetime.now(timezone.utc) - ensure_aware(record.created_at) > ttl:
            raise UnauthorizedError(
                "Authentication TimeOut",
                reason="email_verification_expired",
            )

        user = User(
            email=normalized_email,
            password_hash=password_hash,
            provider="local",
        )
        session.add(user)
        await session.flush()
        if user.serial_number is None:
            raise RuntimeError("User serial number was not assigned")
        user.nickname = default_nickname(user.serial_number)
        session.add(user)
        await session.flush()
        await delete_verification_record(session, normalized_email)

    logger.info("Registered local user", extra={"user_id": user.id})
    return await get_user_summary(session, user.id)


async def create_oauth_user(
    session: AsyncSession,
    *,
    email: str,
    nickname: str,
    provider: str,
    provider_key: str,
) -> UserSummary:
    normalized_email = normalize_email(email)
    async with atomic(session, on_conflict=_registration_conflict):
        if await find_user(session, email=normalized_email) is not None:
            raise _email_conflict()
        if await find_user(session, nickname=nickname) is not None:
            raise _nickname_conflict()

        user = User(
            email=normalized_email,
            nickname=nickname,
            provider=provider,
            provider_key=provider_key,
        )
        session.add(user)
        await session.flush()
        session.add(ProfileImage(user_id=user.id))

    logger.info(
        "Registered OAuth user",
        extra={"user_id": user.id, "provider": provider},
    )
    return await get_user_summary(session, user.id)
