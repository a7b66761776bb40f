"""Business logic services."""

from .errors import (
    ConflictError,
    DomainError,
    InvalidArgumentError,
    NotFoundError,
    UnauthorizedError,
)
from .pagination import PageRequest, total_pages
from .storage import create_presigned_get_url, get_minio_client, resolve_image_url
from .transactions import atomic

__all__ = [
    "DomainError",
    "NotFoundError",
    "ConflictError",
    "UnauthorizedError",
    "InvalidArgumentError",
    "PageRequest",
    "total_pages",
    "atomic",
    "get_minio_client",
    "create_presigned_get_url",
    "resolve_image_url",
]
