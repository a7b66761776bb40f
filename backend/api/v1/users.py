"""User directory, follow and block endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_user_id, get_db
from services.account_blocks import block_user, unblock_user
from services.follows import FollowDirection, follow_user, unfollow_user
from services.pagination import PageRequest
from services.users.directory import (
    MAX_NICKNAME_LENGTH,
    MAX_SEARCH_LENGTH,
    MIN_NICKNAME_LENGTH,
    MIN_SEARCH_LENGTH,
    get_user_follow_page,
    get_user_profile,
    is_nickname_available,
    list_blocked_users,
    search_users,
)
from services.users.profile import (
    MAX_INTERESTS,
    delete_profile_image,
    delete_user,
    update_profile,
    update_profile_image,
)
from services.users.queries import get_user_summary
from services.users.schemas import Page, UserSummary

from .pagination import page_params

router = APIRouter(tags=["users"])
MAX_PROFILE_LENGTH = 200


class ProfileUpdateRequest(BaseModel):
    nickname: str = Field(min_length=MIN_NICKNAME_LENGTH, max_length=MAX_NICKNAME_LENGTH)
    profile: str | None = Field(default=None, max_length=MAX_PROFILE_LENGTH)
    interests: list[str] | None = Field(default=None, max_length=MAX_INTERESTS)


class ProfileImageRequest(BaseModel):
    image_key: str = Field(min_length=1, max_length=255)


class NicknameAvailabilityResponse(BaseModel):
    nickname: str
    available: bool


class MutationResponse(BaseModel):
    detail: str


@router.get("/users/search", response_model=Page[UserSummary])
async def search_user_directory(
    q: Annotated[str, Query(min_length=MIN_SEARCH_LENGTH, max_length=MAX_SEARCH_LENGTH)],
    page_request: PageRequest = Depends(page_params),
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> Page[UserSummary]:
    return await search_users(
        session,
        current_user_id,
        q,
        page=page_request.page,
        size=page_request.size,
    )


@router.get("/users/nickname-availability", response_model=NicknameAvailabilityResponse)
async def check_nickname_availability(
    nickname: Annotated[str, Query()],
    session: AsyncSession = Depends(get_db),
) -> NicknameAvailabilityResponse:
    available = await is_nickname_available(session, nickname)
    return NicknameAvailabilityResponse(nickname=nickname.strip(), available=available)


@router.get("/users/{user_id}", response_model=UserSummary)
async def read_user_profile(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> UserSummary:
    return await get_user_profile(session, current_user_id, user_id)


@router.get("/users/{user_id}/followers", response_model=Page[UserSummary])
async def list_followers(
    user_id: str,
    page_request: PageRequest = Depends(page_params),
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> Page[UserSummary]:
    return await get_user_follow_page(
        session,
        current_user_id,
        user_id,
        FollowDirection.FOLLOWERS,
        page=page_request.page,
        size=page_request.size,
    )


@router.get("/users/{user_id}/followees", response_model=Page[UserSummary])
async def list_followees(
    user_id: str,
    page_request: PageRequest = Depends(page_params),
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> Page[UserSummary]:
    return await get_user_follow_page(
        session,
        current_user_id,
        user_id,
        FollowDirection.FOLLOWEES,
        page=page_request.page,
        size=page_request.size,
    )


@router.post(
    "/users/{user_id}/follow",
    response_model=MutationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def follow(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> MutationResponse:
    await follow_user(session, follower_id=current_user_id, followee_id=user_id)
    return MutationResponse(detail="Followed")


@router.delete("/users/{user_id}/follow", status_code=status.HTTP_204_NO_CONTENT)
async def unfollow(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> Response:
    await unfollow_user(session, follower_id=current_user_id, followee_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/users/{user_id}/block",
    response_model=MutationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def block(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> MutationResponse:
    await block_user(session, blocker_id=current_user_id, blocked_id=user_id)
    return MutationResponse(detail="Blocked")


@router.delete("/users/{user_id}/block", status_code=status.HTTP_204_NO_CONTENT)
async def unblock(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> Response:
    await unblock_user(session, blocker_id=current_user_id, blocked_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=UserSummary)
async def read_me(
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> UserSummary:
    return await get_user_summary(session, current_user_id)


@router.patch("/me", response_model=UserSummary)
async def update_me(
    payload: ProfileUpdateRequest,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> UserSummary:
    return await update_profile(
        session,
        current_user_id,
        nickname=payload.nickname,
        profile=payload.profile,
        interests=payload.interests,
    )


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_me(
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> Response:
    await delete_user(session, current_user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/me/profile-image", response_model=UserSummary)
async def replace_my_profile_image(
    payload: ProfileImageRequest,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> UserSummary:
    return await update_profile_image(session, current_user_id, payload.image_key)


@router.delete("/me/profile-image", status_code=status.HTTP_204_NO_CONTENT)
async def remove_my_profile_image(
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> Response:
    await delete_profile_image(session, current_user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me/blocked-users", response_model=Page[UserSummary])
async def list_my_blocked_users(
    page_request: PageRequest = Depends(page_params),
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> Page[UserSummary]:
    return await list_blocked_users(
        session,
        current_user_id,
        page=page_request.page,
        size=page_request.size,
    )
