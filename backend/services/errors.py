"""Domain error kinds raised by service operations.

The transport layer maps each kind to a response; services never translate
them into generic failures.
"""

from __future__ import annotations


class DomainError(Exception):
    default_detail = "Request failed"
    default_reason = "error"

    def __init__(self, detail: str | None = None, *, reason: str | None = None) -> None:
        self.detail = detail or self.default_detail
        self.reason = reason or self.default_reason
        super().__init__(self.detail)


class NotFoundError(DomainError):
    """Referenced user or review is absent or soft-deleted."""

    default_detail = "Not found"
    default_reason = "not_found"


class ConflictError(DomainError):
    """Duplicate email/nickname or an edge that already exists."""

    default_detail = "Conflict"
    default_reason = "conflict"


class UnauthorizedError(DomainError):
    """Email verification missing, mismatched or stale."""

    default_detail = "Unauthorized"
    default_reason = "unauthorized"


class InvalidArgumentError(DomainError):
    default_detail = "Invalid argument"
    default_reason = "invalid_argument"


__all__ = [
    "DomainError",
    "NotFoundError",
    "ConflictError",
    "UnauthorizedError",
    "InvalidArgumentError",
]
