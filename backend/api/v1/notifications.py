"""Notification endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_user_id, get_db
from services.notifications import (
    NotificationPage,
    UnreadCountResponse,
    count_unread_notifications,
    get_my_notifications_page,
)
from services.pagination import PageRequest

from .pagination import page_params

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationPage)
async def list_my_notifications(
    page_request: PageRequest = Depends(page_params),
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> NotificationPage:
    """List notifications newest first; opening the list marks all of them read."""
    return await get_my_notifications_page(
        session,
        current_user_id,
        page=page_request.page,
        size=page_request.size,
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> UnreadCountResponse:
    unread_count = await count_unread_notifications(session, current_user_id)
    return UnreadCountResponse(unread_count=unread_count)
