"""Notification kinds and message rendering."""

from __future__ import annotations

from enum import IntEnum

from services.errors import InvalidArgumentError


class NotificationType(IntEnum):
    FOLLOW = 1
    REVIEW_LIKE = 2
    COMMENT = 3


def parse_notification_type(value: object) -> NotificationType:
    """Coerce a raw tag into a ``NotificationType`` or reject it."""
    if isinstance(value, NotificationType):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(
            f"Unsupported notification type: {value!r}",
            reason="unknown_notification_type",
        )
    try:
        return NotificationType(value)
    except ValueError as exc:
        raise InvalidArgumentError(
            f"Unsupported notification type: {value!r}",
            reason="unknown_notification_type",
        ) from exc


def render_message(
    notification_type: NotificationType,
    sender_nickname: str,
    comment: str | None = None,
) -> str:
    """Render the message stored with a notification at creation time."""
    match notification_type:
        case NotificationType.FOLLOW:
            return f"{sender_nickname}님이 회원님을 팔로우하기 시작했습니다."
        case NotificationType.REVIEW_LIKE:
            return f"{sender_nickname}님이 내 리뷰를 좋아합니다."
        case NotificationType.COMMENT:
            message = f"{sender_nickname}님이 댓글을 남겼습니다."
            if comment:
                message = f"{message} {comment}"
            return message
    raise InvalidArgumentError(
        f"Unsupported notification type: {notification_type!r}",
        reason="unknown_notification_type",
    )
