"""Notification ledger model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, SmallInteger, String, Text, func
from sqlmodel import Field, SQLModel


class Notification(SQLModel, table=True):
    """Immutable notification entry; only ``read_at`` is ever updated."""

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_recipient_created_at", "recipient_id", "created_at"),
        Index("ix_notifications_recipient_read_at", "recipient_id", "read_at"),
    )

    id: int | None = Field(default=None, primary_key=True)
    sender_id: str = Field(
        sa_column=Column(
            String(36),
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        )
    )
    recipient_id: str = Field(
        sa_column=Column(
            String(36),
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        )
    )
    type: int = Field(sa_column=Column(SmallInteger, nullable=False))
    review_id: int | None = Field(
        default=None,
        sa_column=Column(
            Integer,
            ForeignKey("reviews.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )
    message: str = Field(sa_column=Column(Text, nullable=False))
    read_at: datetime | None = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )
    created_at: datetime | None = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        ),
    )
