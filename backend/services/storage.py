"""Object storage access for profile images."""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache

from minio import Minio

from core import settings


@lru_cache
def get_minio_client() -> Minio:
    """Return a cached MinIO client configured from settings."""
    return Minio(
        settings.minio_endpoint,
        access_key=settings.minio_access_key,
        secret_key=settings.minio_secret_key,
        secure=settings.minio_secure,
    )


def create_presigned_get_url(
    object_key: str,
    *,
    expires_seconds: int = 120,
    client: Minio | None = None,
) -> str:
    """Return a short-lived pre-signed URL for an object."""
    normalized_object_key = object_key.strip()
    if not normalized_object_key:
        raise ValueError("object_key must not be empty")
    if expires_seconds <= 0:
        raise ValueError("expires_seconds must be positive")

    client = client or get_minio_client()
    return client.presigned_get_object(
        settings.minio_bucket,
        normalized_object_key,
        expires=timedelta(seconds=expires_seconds),
    )


def resolve_image_url(object_key: str | None, client: Minio | None = None) -> str | None:
    """Map a stored image key to the reference handed to clients."""
    if not object_key:
        return None
    ttl = settings.profile_image_url_ttl_seconds
    if ttl <= 0:
        return object_key
    return create_presigned_get_url(object_key, expires_seconds=ttl, client=client)
