"""Tests for the notification ledger."""

import asyncio

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Notification
from services.errors import InvalidArgumentError, NotFoundError
from services.notifications import (
    NotificationType,
    count_unread_notifications,
    create_notification,
    get_my_notifications_page,
    parse_notification_type,
    render_message,
)
from services.users.profile import update_profile


def test_render_message_templates() -> None:
    assert (
        render_message(NotificationType.FOLLOW, "duck")
        == "duck님이 회원님을 팔로우하기 시작했습니다."
    )
    assert render_message(NotificationType.REVIEW_LIKE, "duck") == "duck님이 내 리뷰를 좋아합니다."
    assert render_message(NotificationType.COMMENT, "duck") == "duck님이 댓글을 남겼습니다."
    assert (
        render_message(NotificationType.COMMENT, "duck", "좋아요")
        == "duck님이 댓글을 남겼습니다. 좋아요"
    )


@pytest.mark.parametrize("raw", [0, 4, "FOLLOW", None, True])
def test_parse_notification_type_rejects_unknown_tags(raw) -> None:
    with pytest.raises(InvalidArgumentError) as exc_info:
        parse_notification_type(raw)
    assert exc_info.value.reason == "unknown_notification_type"


def test_parse_notification_type_accepts_known_ints() -> None:
    assert parse_notification_type(1) is NotificationType.FOLLOW
    assert parse_notification_type(3) is NotificationType.COMMENT


@pytest.mark.asyncio
async def test_unknown_type_writes_nothing(db_session: AsyncSession, make_user):
    sender = await make_user("sender")
    recipient = await make_user("recipient")

    with pytest.raises(InvalidArgumentError):
        await create_notification(
            db_session,
            sender_id=sender.id,
            recipient_id=recipient.id,
            type=99,
        )

    rows = (await db_session.execute(select(Notification))).scalars().all()
    assert rows == []


@pytest.mark.asyncio
async def test_missing_sender_is_rejected(db_session: AsyncSession, make_user):
    recipient = await make_user("recipient")
    with pytest.raises(NotFoundError):
        await create_notification(
            db_session,
            sender_id="missing-user",
            recipient_id=recipient.id,
            type=NotificationType.FOLLOW,
        )


@pytest.mark.asyncio
async def test_page_math_and_mark_all_read(db_session: AsyncSession, make_user):
    sender = await make_user("sender")
    recipient = await make_user("recipient")
    for _ in range(7):
        await create_notification(
            db_session,
            sender_id=sender.id,
            recipient_id=recipient.id,
            type=NotificationType.FOLLOW,
        )
    assert await count_unread_notifications(db_session, recipient.id) == 7

    first_page = await get_my_notifications_page(db_session, recipient.id, page=1, size=3)

    assert first_page.total_pages == 3
    assert len(first_page.notifications) == 3
    ids = [item.id for item in first_page.notifications]
    assert ids == sorted(ids, reverse=True)
    # Items show the state they had before this read.
    assert all(item.read_at is None for item in first_page.notifications)
    # Every unread entry is marked, not only the returned page.
    assert await count_unread_notifications(db_session, recipient.id) == 0

    last_page = await get_my_notifications_page(db_session, recipient.id, page=3, size=3)
    assert len(last_page.notifications) == 1
    assert last_page.notifications[0].is_read


@pytest.mark.asyncio
async def test_page_beyond_range_is_empty(db_session: AsyncSession, make_user):
    sender = await make_user("sender")
    recipient = await make_user("recipient")
    await create_notification(
        db_session,
        sender_id=sender.id,
        recipient_id=recipient.id,
        type=NotificationType.FOLLOW,
    )

    page = await get_my_notifications_page(db_session, recipient.id, page=5, size=10)
    assert page.total_pages == 1
    assert page.notifications == []
    assert await count_unread_notifications(db_session, recipient.id) == 0


@pytest.mark.asyncio
async def test_empty_ledger_has_zero_pages(db_session: AsyncSession, make_user):
    recipient = await make_user("recipient")
    page = await get_my_notifications_page(db_session, recipient.id, page=1, size=10)
    assert page.total_pages == 0
    assert page.notifications == []


@pytest.mark.asyncio
async def test_message_is_a_snapshot_of_the_sender_nickname(
    db_session: AsyncSession,
    make_user,
):
    sender = await make_user("duck1")
    recipient = await make_user("recipient")
    await create_notification(
        db_session,
        sender_id=sender.id,
        recipient_id=recipient.id,
        type=NotificationType.FOLLOW,
    )

    await update_profile(db_session, sender.id, nickname="duck2")

    page = await get_my_notifications_page(db_session, recipient.id, page=1, size=10)
    assert page.notifications[0].message == "duck1님이 회원님을 팔로우하기 시작했습니다."


@pytest.mark.asyncio
async def test_pages_only_show_the_recipients_entries(db_session: AsyncSession, make_user):
    sender = await make_user("sender")
    first = await make_user("first")
    second = await make_user("second")
    await create_notification(
        db_session,
        sender_id=sender.id,
        recipient_id=first.id,
        type=NotificationType.FOLLOW,
    )
    await create_notification(
        db_session,
        sender_id=sender.id,
        recipient_id=second.id,
        type=NotificationType.FOLLOW,
    )

    page = await get_my_notifications_page(db_session, first.id, page=1, size=10)

    assert [item.recipient_id for item in page.notifications] == [first.id]
    assert await count_unread_notifications(db_session, second.id) == 1



@pytest.mark.asyncio
async def test_concurrent_page_reads_mark_everything_read_once(session_maker, make_user):
    sender = await make_user("sender")
    recipient = await make_user("recipient")
    async with session_maker() as setup_session:
        for _ in range(5):
            await create_notification(
                setup_session,
                sender_id=sender.id,
                recipient_id=recipient.id,
                type=NotificationType.FOLLOW,
            )

    async def read_first_page():
        async with session_maker() as session:
            return await get_my_notifications_page(session, recipient.id, page=1, size=10)

    first, second = await asyncio.gather(read_first_page(), read_first_page())

    for page in (first, second):
        assert page.total_pages == 1
        assert len(page.notifications) == 5

    async with session_maker() as check_session:
        assert await count_unread_notifications(check_session, recipient.id) == 0
        read_at = (
            await check_session.execute(select(Notification.read_at))
        ).scalars().all()
        assert len(read_at) == 5
        assert all(value is not None for value in read_at)
