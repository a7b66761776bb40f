"""Tests for block annotation and block edges."""

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Follow, UserBlock
from services.account_blocks import (
    annotate_blocked,
    block_user,
    get_block_state,
    unblock_user,
)
from services.errors import ConflictError, InvalidArgumentError, NotFoundError
from services.users.schemas import BlockAnnotated


@pytest.mark.asyncio
async def test_annotate_blocked_preserves_order_and_flags_only_outgoing_blocks(
    db_session: AsyncSession,
    make_user,
):
    viewer = await make_user("viewer")
    first = await make_user("first")
    second = await make_user("second")
    third = await make_user("third")

    db_session.add(UserBlock(blocker_id=viewer.id, blocked_id=second.id))
    # Being blocked by someone never marks them as blocked for the viewer.
    db_session.add(UserBlock(blocker_id=third.id, blocked_id=viewer.id))
    await db_session.commit()

    candidates = [
        BlockAnnotated(id=third.id),
        BlockAnnotated(id=second.id),
        BlockAnnotated(id=first.id),
    ]
    annotated = await annotate_blocked(db_session, viewer.id, candidates)

    assert [record.id for record in annotated] == [third.id, second.id, first.id]
    assert [record.is_blocked for record in annotated] == [False, True, False]
    assert all(record.is_blocked is False for record in candidates)


@pytest.mark.asyncio
async def test_annotate_blocked_on_empty_input(db_session: AsyncSession, make_user):
    viewer = await make_user("viewer")
    assert await annotate_blocked(db_session, viewer.id, []) == []


@pytest.mark.asyncio
async def test_annotate_blocked_keeps_duplicates(db_session: AsyncSession, make_user):
    viewer = await make_user("viewer")
    target = await make_user("target")
    await block_user(db_session, blocker_id=viewer.id, blocked_id=target.id)

    annotated = await annotate_blocked(
        db_session,
        viewer.id,
        [BlockAnnotated(id=target.id), BlockAnnotated(id=target.id)],
    )
    assert [record.is_blocked for record in annotated] == [True, True]


@pytest.mark.asyncio
async def test_block_removes_follow_edges_in_both_directions(
    db_session: AsyncSession,
    make_user,
):
    alice = await make_user("alice")
    bob = await make_user("bob")
    db_session.add(Follow(follower_id=alice.id, followee_id=bob.id))
    db_session.add(Follow(follower_id=bob.id, followee_id=alice.id))
    await db_session.commit()

    await block_user(db_session, blocker_id=alice.id, blocked_id=bob.id)

    follows = (await db_session.execute(select(Follow))).scalars().all()
    assert follows == []
    state = await get_block_state(db_session, viewer_id=alice.id, target_id=bob.id)
    assert state.either


@pytest.mark.asyncio
async def test_block_rejects_self_duplicate_and_unknown_target(
    db_session: AsyncSession,
    make_user,
):
    alice = await make_user("alice")
    bob = await make_user("bob")

    with pytest.raises(InvalidArgumentError):
        await block_user(db_session, blocker_id=alice.id, blocked_id=alice.id)
    with pytest.raises(NotFoundError):
        await block_user(db_session, blocker_id=alice.id, blocked_id="missing-user")

    await block_user(db_session, blocker_id=alice.id, blocked_id=bob.id)
    with pytest.raises(ConflictError) as exc_info:
        await block_user(db_session, blocker_id=alice.id, blocked_id=bob.id)
    assert exc_info.value.reason == "already_blocked"


@pytest.mark.asyncio
async def test_unblock_requires_existing_block(db_session: AsyncSession, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")

    with pytest.raises(NotFoundError):
        await unblock_user(db_session, blocker_id=alice.id, blocked_id=bob.id)

    await block_user(db_session, blocker_id=alice.id, blocked_id=bob.id)
    await unblock_user(db_session, blocker_id=alice.id, blocked_id=bob.id)

    blocks = (await db_session.execute(select(UserBlock))).scalars().all()
    assert blocks == []
