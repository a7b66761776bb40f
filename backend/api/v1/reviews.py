"""Review interaction endpoints."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_user_id, get_db
from services.reviews import (
    MAX_COMMENT_LENGTH,
    bookmark_review,
    create_comment,
    create_review,
    like_review,
    share_review,
    unbookmark_review,
    unlike_review,
)

router = APIRouter(prefix="/reviews", tags=["reviews"])


class ReviewCreate(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    content: str = Field(min_length=1)


class ReviewRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    author_id: str
    title: str
    content: str
    created_at: datetime


class CommentCreate(BaseModel):
    content: str = Field(min_length=1, max_length=MAX_COMMENT_LENGTH)


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    review_id: int
    author_id: str
    content: str
    created_at: datetime


@router.post("", response_model=ReviewRead, status_code=status.HTTP_201_CREATED)
async def post_review(
    payload: ReviewCreate,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> ReviewRead:
    review = await create_review(
        session,
        author_id=current_user_id,
        title=payload.title,
        content=payload.content,
    )
    return ReviewRead.model_validate(review)


@router.post("/{review_id}/bookmark", status_code=status.HTTP_204_NO_CONTENT)
async def bookmark(
    review_id: int,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> Response:
    await bookmark_review(session, user_id=current_user_id, review_id=review_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{review_id}/bookmark", status_code=status.HTTP_204_NO_CONTENT)
async def unbookmark(
    review_id: int,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> Response:
    await unbookmark_review(session, user_id=current_user_id, review_id=review_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{review_id}/share", status_code=status.HTTP_204_NO_CONTENT)
async def share(
    review_id: int,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> Response:
    await share_review(session, user_id=current_user_id, review_id=review_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{review_id}/like", status_code=status.HTTP_204_NO_CONTENT)
async def like(
    review_id: int,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> Response:
    await like_review(session, user_id=current_user_id, review_id=review_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{review_id}/like", status_code=status.HTTP_204_NO_CONTENT)
async def unlike(
    review_id: int,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> Response:
    await unlike_review(session, user_id=current_user_id, review_id=review_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{review_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
)
async def comment(
    review_id: int,
    payload: CommentCreate,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> CommentRead:
    created = await create_comment(
        session,
        author_id=current_user_id,
        review_id=review_id,
        content=payload.content,
    )
    return CommentRead.model_validate(created)
