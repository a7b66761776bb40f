"""Tests for MinIO storage helpers."""

from unittest.mock import MagicMock

import pytest

from services import storage


@pytest.fixture(autouse=True)
def _reset_cache():
    storage.get_minio_client.cache_clear()
    yield
    storage.get_minio_client.cache_clear()


def test_get_minio_client_uses_settings(monkeypatch):
    mock_client = MagicMock(name="Minio")
    created_clients = []

    monkeypatch.setattr(storage.settings, "minio_secure", True)

    def fake_minio(endpoint, access_key, secret_key, secure):
        created_clients.append(
            {
                "endpoint": endpoint,
                "access_key": access_key,
                "secret_key": secret_key,
                "secure": secure,
            }
        )
        return mock_client

    monkeypatch.setattr(storage, "Minio", fake_minio)

    client = storage.get_minio_client()
    assert client is mock_client
    assert storage.get_minio_client() is client  # cached

    assert created_clients == [
        {
            "endpoint": storage.settings.minio_endpoint,
            "access_key": storage.settings.minio_access_key,
            "secret_key": storage.settings.minio_secret_key,
            "secure": True,
        }
    ]


def test_create_presigned_get_url_calls_minio_client():
    client = MagicMock()
    client.presigned_get_object.return_value = "https://signed.local/object"

    signed_url = storage.create_presigned_get_url(
        "profiles/demo.jpg",
        expires_seconds=90,
        client=client,
    )

    assert signed_url == "https://signed.local/object"
    client.presigned_get_object.assert_called_once()
    called_bucket, called_key = client.presigned_get_object.call_args.args[:2]
    called_expires = client.presigned_get_object.call_args.kwargs["expires"]
    assert called_bucket == storage.settings.minio_bucket
    assert called_key == "profiles/demo.jpg"
    assert int(called_expires.total_seconds()) == 90


def test_create_presigned_get_url_rejects_invalid_inputs():
    with pytest.raises(ValueError):
        storage.create_presigned_get_url("")

    with pytest.raises(ValueError):
        storage.create_presigned_get_url("profiles/demo.jpg", expires_seconds=0)


def test_resolve_image_url_returns_key_when_presigning_disabled(monkeypatch):
    monkeypatch.setattr(storage.settings, "profile_image_url_ttl_seconds", 0)
    client = MagicMock()

    assert storage.resolve_image_url("profiles/demo.jpg", client) == "profiles/demo.jpg"
    assert storage.resolve_image_url(None, client) is None
    client.presigned_get_object.assert_not_called()


def test_resolve_image_url_presigns_with_configured_ttl(monkeypatch):
    monkeypatch.setattr(storage.settings, "profile_image_url_ttl_seconds", 300)
    client = MagicMock()
    client.presigned_get_object.return_value = "https://signed.local/profile"

    assert storage.resolve_image_url("profiles/demo.jpg", client) == "https://signed.local/profile"
    called_expires = client.presigned_get_object.call_args.kwargs["expires"]
    assert int(called_expires.total_seconds()) == 300
