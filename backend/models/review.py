"""Review and review-interaction models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlmodel import Field, SQLModel


class Review(SQLModel, table=True):
    __tablename__ = "reviews"
    __table_args__ = (Index("ix_reviews_author_created_at", "author_id", "created_at"),)

    id: int | None = Field(default=None, primary_key=True)
    author_id: str = Field(
        sa_column=Column(
            String(36),
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        )
    )
    title: str = Field(sa_column=Column(String(100), nullable=False))
    content: str = Field(sa_column=Column(Text, nullable=False))
    created_at: datetime | None = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        ),
    )
    deleted_at: datetime | None = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )


def _user_column() -> Column:
    return Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )


def _review_column() -> Column:
    return Column(
        Integer,
        ForeignKey("reviews.id", ondelete="CASCADE"),
        primary_key=True,
    )


def _created_at_column() -> Column:
    return Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class ReviewBookmark(SQLModel, table=True):
    """Marks a review the account saved for later."""

    __tablename__ = "review_bookmarks"

    user_id: str = Field(sa_column=_user_column())
    review_id: int = Field(sa_column=_review_column())
    created_at: datetime | None = Field(default=None, sa_column=_created_at_column())


class ReviewShare(SQLModel, table=True):
    """Marks a review the account shared at least once."""

    __tablename__ = "review_shares"

    user_id: str = Field(sa_column=_user_column())
    review_id: int = Field(sa_column=_review_column())
    created_at: datetime | None = Field(default=None, sa_column=_created_at_column())


class ReviewLike(SQLModel, table=True):
    __tablename__ = "review_likes"
    __table_args__ = (Index("ix_review_likes_review_id", "review_id"),)

    user_id: str = Field(sa_column=_user_column())
    review_id: int = Field(sa_column=_review_column())
    created_at: datetime | None = Field(default=None, sa_column=_created_at_column())


class Comment(SQLModel, table=True):
    __tablename__ = "comments"
    __table_args__ = (Index("ix_comments_review_created_at", "review_id", "created_at"),)

    id: int | None = Field(default=None, primary_key=True)
    review_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("reviews.id", ondelete="CASCADE"),
            nullable=False,
        )
    )
    author_id: str = Field(
        sa_column=Column(
            String(36),
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        )
    )
    content: str = Field(sa_column=Column(Text, nullable=False))
    created_at: datetime | None = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        ),
    )
