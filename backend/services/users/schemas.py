"""User directory payload schemas."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

ItemT = TypeVar("ItemT")


class BlockAnnotated(BaseModel):
    """Any user-like record the block filter can flag."""

    model_config = ConfigDict(frozen=True)

    id: str
    # True when the viewer blocked this user; set by the block filter.
    is_blocked: bool = False


class UserSummary(BlockAnnotated):
    """User record as returned by every user-facing listing."""

    email: str
    nickname: str | None = None
    profile: str | None = None
    interests: list[str] = Field(default_factory=list)
    profile_image: str | None = None
    follower_count: int = 0
    followee_count: int = 0


class Page(BaseModel, Generic[ItemT]):
    total_pages: int
    items: list[ItemT]
