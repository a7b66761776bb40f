"""Tests for follow edges and the follow directory."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Follow, Notification
from services.account_blocks import block_user
from services.errors import ConflictError, InvalidArgumentError, NotFoundError
from services.follows import (
    FollowDirection,
    follow_user,
    get_follow_page,
    is_following,
    unfollow_user,
)
from services.notifications import NotificationType
from services.users.directory import get_user_follow_page
from services.users.profile import delete_user

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


async def _add_edges(session: AsyncSession, edges: list[tuple[str, str]]) -> None:
    for offset, (follower_id, followee_id) in enumerate(edges):
        session.add(
            Follow(
                follower_id=follower_id,
                followee_id=followee_id,
                created_at=BASE_TIME + timedelta(minutes=offset),
            )
        )
    await session.commit()


@pytest.mark.asyncio
async def test_followers_and_followees_list_the_other_side(
    db_session: AsyncSession,
    make_user,
):
    a = await make_user("aaa")
    b = await make_user("bbb")
    c = await make_user("ccc")
    await _add_edges(db_session, [(a.id, b.id), (c.id, b.id), (b.id, a.id)])

    followers = await get_follow_page(
        db_session, b.id, FollowDirection.FOLLOWERS, page=1, size=10
    )
    followees = await get_follow_page(
        db_session, b.id, FollowDirection.FOLLOWEES, page=1, size=10
    )

    # Newest edge first.
    assert [user.id for user in followers.items] == [c.id, a.id]
    assert [user.id for user in followees.items] == [a.id]
    assert followers.total_pages == 1
    assert followees.total_pages == 1


@pytest.mark.asyncio
async def test_follow_page_counts_and_paginates(db_session: AsyncSession, make_user):
    target = await make_user("target")
    followers = [await make_user(f"fan{index}") for index in range(7)]
    await _add_edges(db_session, [(fan.id, target.id) for fan in followers])

    page = await get_follow_page(
        db_session, target.id, "followers", page=3, size=3
    )

    assert page.total_pages == 3
    assert [user.id for user in page.items] == [followers[0].id]
    assert page.items[0].followee_count == 1


@pytest.mark.asyncio
async def test_follow_page_rejects_unknown_direction(db_session: AsyncSession, make_user):
    user = await make_user("user")
    with pytest.raises(InvalidArgumentError) as exc_info:
        await get_follow_page(db_session, user.id, "friends", page=1, size=10)
    assert exc_info.value.reason == "unknown_follow_direction"


@pytest.mark.asyncio
async def test_follow_page_hides_soft_deleted_users(db_session: AsyncSession, make_user):
    target = await make_user("target")
    kept = await make_user("kept")
    removed = await make_user("removed")
    await _add_edges(db_session, [(kept.id, target.id), (removed.id, target.id)])

    await delete_user(db_session, removed.id)
    page = await get_follow_page(
        db_session, target.id, FollowDirection.FOLLOWERS, page=1, size=10
    )

    assert [user.id for user in page.items] == [kept.id]
    assert page.total_pages == 1


@pytest.mark.asyncio
async def test_follow_user_records_notification(db_session: AsyncSession, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")

    await follow_user(db_session, follower_id=alice.id, followee_id=bob.id)

    assert await is_following(db_session, follower_id=alice.id, followee_id=bob.id)
    notifications = (await db_session.execute(select(Notification))).scalars().all()
    assert len(notifications) == 1
    assert notifications[0].recipient_id == bob.id
    assert notifications[0].type == NotificationType.FOLLOW
    assert notifications[0].message == "alice님이 회원님을 팔로우하기 시작했습니다."


@pytest.mark.asyncio
async def test_follow_user_rejections(db_session: AsyncSession, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    carol = await make_user("carol")

    with pytest.raises(InvalidArgumentError):
        await follow_user(db_session, follower_id=alice.id, followee_id=alice.id)
    with pytest.raises(NotFoundError):
        await follow_user(db_session, follower_id=alice.id, followee_id="missing-user")

    await follow_user(db_session, follower_id=alice.id, followee_id=bob.id)
    with pytest.raises(ConflictError) as duplicate:
        await follow_user(db_session, follower_id=alice.id, followee_id=bob.id)
    assert duplicate.value.reason == "already_following"

    await block_user(db_session, blocker_id=carol.id, blocked_id=alice.id)
    with pytest.raises(ConflictError) as blocked:
        await follow_user(db_session, follower_id=alice.id, followee_id=carol.id)
    assert blocked.value.reason == "blocked"

    notifications = (await db_session.execute(select(Notification))).scalars().all()
    assert len(notifications) == 1


@pytest.mark.asyncio
async def test_unfollow_removes_edge(db_session: AsyncSession, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")

    with pytest.raises(NotFoundError):
        await unfollow_user(db_session, follower_id=alice.id, followee_id=bob.id)

    await follow_user(db_session, follower_id=alice.id, followee_id=bob.id)
    await unfollow_user(db_session, follower_id=alice.id, followee_id=bob.id)
    assert not await is_following(db_session, follower_id=alice.id, followee_id=bob.id)


@pytest.mark.asyncio
async def test_user_follow_page_is_annotated_for_viewer(
    db_session: AsyncSession,
    make_user,
):
    viewer = await make_user("viewer")
    target = await make_user("target")
    fan = await make_user("fan")
    other = await make_user("other")
    await _add_edges(db_session, [(fan.id, target.id), (other.id, target.id)])
    await block_user(db_session, blocker_id=viewer.id, blocked_id=fan.id)

    page = await get_user_follow_page(
        db_session,
        viewer.id,
        target.id,
        FollowDirection.FOLLOWERS,
        page=1,
        size=10,
    )

    flags = {user.id: user.is_blocked for user in page.items}
    assert flags == {fan.id: True, other.id: False}

    with pytest.raises(NotFoundError):
        await get_user_follow_page(
            db_session,
            viewer.id,
            "missing-user",
            FollowDirection.FOLLOWERS,
            page=1,
            size=10,
        )


@pytest.mark.asyncio
async def test_follow_page_orders_edges_created_in_quick_succession(
    db_session: AsyncSession,
    make_user,
):
    target = await make_user("target")
    fans = [await make_user(f"fan{index}") for index in range(6)]
    for fan in fans:
        await follow_user(db_session, follower_id=fan.id, followee_id=target.id)

    page = await get_follow_page(
        db_session, target.id, FollowDirection.FOLLOWERS, page=1, size=10
    )

    assert [user.nickname for user in page.items] == [
        "fan5",
        "fan4",
        "fan3",
        "fan2",
        "fan1",
        "fan0",
    ]
