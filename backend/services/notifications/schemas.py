"""Notification payload schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from .types import NotificationType


class NotificationItem(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    sender_id: str
    recipient_id: str
    type: NotificationType
    review_id: int | None = None
    message: str
    read_at: datetime | None = None
    created_at: datetime | None = None

    @property
    def is_read(self) -> bool:
        return self.read_at is not None


class NotificationPage(BaseModel):
    total_pages: int
    notifications: list[NotificationItem]


class UnreadCountResponse(BaseModel):
    unread_count: int
