"""Request-scoped dependencies."""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from core import settings
from db import get_session
from services.users.queries import find_user


async def get_db() -> AsyncIterator[AsyncSession]:
    async for session in get_session():
        yield session


async def get_current_user_id(
    request: Request,
    session: AsyncSession = Depends(get_db),
) -> str:
    """Resolve the caller from the header set by the authenticating gateway."""
    raw_user_id = (request.headers.get(settings.trusted_user_header) or "").strip()
    if not raw_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    user = await find_user(session, user_id=raw_user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user.id
