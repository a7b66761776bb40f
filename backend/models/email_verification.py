"""Email verification record model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, String, text
from sqlmodel import Field, SQLModel

from .timestamps import utcnow


class EmailVerification(SQLModel, table=True):
    """Pending or verified email code; one row per email."""

    __tablename__ = "email_verifications"

    email: str = Field(sa_column=Column(String(255), primary_key=True))
    code: str = Field(sa_column=Column(String(12), nullable=False))
    is_verified: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, server_default=text("false")),
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
