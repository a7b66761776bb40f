"""Email verification records consumed by local registration."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from core import generate_numeric_code, settings
from db.expressions import eq
from models import EmailVerification
from services.errors import NotFoundError, UnauthorizedError
from services.transactions import atomic

logger = logging.getLogger(__name__)


def normalize_email(value: str) -> str:
    return value.strip().lower()


def ensure_aware(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


async def get_verification_record(
    session: AsyncSession,
    email: str,
    *,
    lock_for_update: bool = False,
) -> EmailVerification | None:
    stmt = select(EmailVerification).where(
        eq(EmailVerification.email, normalize_email(email))
    )
    if lock_for_update:
        stmt = stmt.with_for_update()
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def delete_verification_record(session: AsyncSession, email: str) -> None:
    """Delete the record inside the caller's open unit."""
    await session.execute(
        delete(EmailVerification).where(
            eq(EmailVerification.email, normalize_email(email))
        )
    )


async def issue_verification_code(session: AsyncSession, email: str) -> str:
    """Replace any record for the email with a fresh unverified code.

    Delivering the code is the mail collaborator's job.
    """
    normalized_email = normalize_email(email)
    code = generate_numeric_code(settings.email_code_length)
    async with atomic(session):
        await delete_verification_record(session, normalized_email)
        session.add(EmailVerification(email=normalized_email, code=code))
    logger.info("Issued email verification code", extra={"email": normalized_email})
    return code


async def verify_email_code(
    session: AsyncSession,
    email: str,
    code: str,
) -> EmailVerification:
    async with atomic(session):
        record = await get_verification_record(session, email, lock_for_update=True)
        if record is None:
            raise NotFoundError(
                "Not Found Verification Code",
                reason="verification_not_found",
            )
        if record.code != code.strip():
            raise UnauthorizedError(
                "Invalid Verification Code",
                reason="verification_code_mismatch",
            )
        record.is_verified = True
        session.add(record)
    return record
