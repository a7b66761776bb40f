"""Notification ledger: append-only entries with read-on-list semantics."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, cast

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from db.expressions import desc, eq
from models import Notification
from services.errors import NotFoundError
from services.pagination import PageRequest, total_pages
from services.transactions import atomic
from services.users.queries import find_user

from .schemas import NotificationItem, NotificationPage
from .types import parse_notification_type, render_message

logger = logging.getLogger(__name__)


def _unread_filter() -> ColumnElement[bool]:
    return cast(ColumnElement[bool], cast(Any, Notification.read_at).is_(None))


async def record_notification(
    session: AsyncSession,
    *,
    sender_id: str,
    recipient_id: str,
    type: object,
    review_id: int | None = None,
    content: str | None = None,
) -> Notification:
    """Add a notification inside the caller's open unit without committing.

    The message is rendered from the sender's nickname as of now and never
    re-rendered afterwards.
    """
    notification_type = parse_notification_type(type)
    sender = await find_user(session, user_id=sender_id)
    if sender is None:
        raise NotFoundError("Not Found Sender", reason="sender_not_found")

    notification = Notification(
        sender_id=sender_id,
        recipient_id=recipient_id,
        type=int(notification_type),
        review_id=review_id,
        message=render_message(notification_type, sender.nickname or "", content),
    )
    session.add(notification)
    await session.flush()
    return notification


async def create_notification(
    session: AsyncSession,
    *,
    sender_id: str,
    recipient_id: str,
    type: object,
    review_id: int | None = None,
    content: str | None = None,
) -> Notification:
    async with atomic(session):
        notification = await record_notification(
            session,
            sender_id=sender_id,
            recipient_id=recipient_id,
            type=type,
            review_id=review_id,
            content=content,
        )
    return notification


async def get_my_notifications_page(
    session: AsyncSession,
    recipient_id: str,
    *,
    page: int,
    size: int,
) -> NotificationPage:
    """Return a page of the recipient's notifications, newest first.

    The count and the page come from one statement, then every unread entry
    of the recipient (not only the listed ones) is marked read in the same
    unit. Returned items keep the read state they had before marking.
    """
    request = PageRequest(page=page, size=size)
    recipient_filter = eq(Notification.recipient_id, recipient_id)

    async with atomic(session):
        result = await session.execute(
            select(Notification, func.count().over().label("total_count"))
            .where(recipient_filter)
            .order_by(
                desc(Notification.created_at),
                desc(Notification.id),
            )
            .offset(request.offset)
            .limit(request.size)
            .execution_options(populate_existing=True)
        )
        rows = result.all()
        if rows:
            total = int(rows[0].total_count)
        else:
            count_result = await session.execute(
                select(func.count()).select_from(Notification).where(recipient_filter)
            )
            total = int(count_result.scalar_one())
        notifications = [NotificationItem.model_validate(row[0]) for row in rows]

        marked = await session.execute(
            update(Notification)
            .where(recipient_filter, _unread_filter())
            .values(read_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )

    marked_rows = int(cast(Any, marked).rowcount or 0)
    if marked_rows > 0:
        logger.debug(
            "Marked notifications read",
            extra={"recipient_id": recipient_id, "marked_rows": marked_rows},
        )
    return NotificationPage(
        total_pages=total_pages(total, request.size),
        notifications=notifications,
    )


async def count_unread_notifications(session: AsyncSession, recipient_id: str) -> int:
    result = await session.execute(
        select(func.count())
        .select_from(Notification)
        .where(eq(Notification.recipient_id, recipient_id), _unread_filter())
    )
    return int(result.scalar_one())
