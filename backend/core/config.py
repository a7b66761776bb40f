"""Application settings loaded from the environment."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "review-social-backend"
    app_env: str = Field(default="local")
    log_level: str = Field(default="INFO")

    database_url: str = Field(default="sqlite+aiosqlite:///./reviews.db")
    database_echo: bool = Field(default=False)

    minio_endpoint: str = Field(default="localhost:9000")
    minio_access_key: str = Field(default="minioadmin")
    minio_secret_key: str = Field(default="minioadmin")
    minio_bucket: str = Field(default="reviews")
    minio_secure: bool = Field(default=False)
    # 0 disables presigning; stored keys are returned as-is.
    profile_image_url_ttl_seconds: int = Field(default=0, ge=0)

    email_verification_ttl_minutes: int = Field(default=30, ge=1)
    email_code_length: int = Field(default=6, ge=4, le=12)

    default_page_size: int = Field(default=20, ge=1)
    max_page_size: int = Field(default=100, ge=1)
    default_nickname_suffix: str = Field(default="번째 오리")

    trusted_user_header: str = Field(default="X-User-Id")


settings = Settings()
