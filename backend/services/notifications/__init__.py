"""Notification domain services."""

from .ledger import (
    count_unread_notifications,
    create_notification,
    get_my_notifications_page,
    record_notification,
)
from .schemas import NotificationItem, NotificationPage, UnreadCountResponse
from .types import NotificationType, parse_notification_type, render_message

__all__ = [
    "NotificationType",
    "NotificationItem",
    "NotificationPage",
    "UnreadCountResponse",
    "parse_notification_type",
    "render_message",
    "record_notification",
    "create_notification",
    "get_my_notifications_page",
    "count_unread_notifications",
]
