"""User account model."""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, DateTime, Index, Integer, String, Text, func, text
from sqlmodel import Field, SQLModel

ACTIVE_USER_PREDICATE = text("deleted_at IS NULL")


class User(SQLModel, table=True):
    """Registered account. Rows are soft-deleted, never removed."""

    __tablename__ = "users"
    __table_args__ = (
        # Email and nickname are only unique among active accounts so a
        # removed account does not hold on to them.
        Index(
            "ux_users_email_active",
            "email",
            unique=True,
            postgresql_where=ACTIVE_USER_PREDICATE,
            sqlite_where=ACTIVE_USER_PREDICATE,
        ),
        Index(
            "ux_users_nickname_active",
            "nickname",
            unique=True,
            postgresql_where=ACTIVE_USER_PREDICATE,
            sqlite_where=ACTIVE_USER_PREDICATE,
        ),
    )

    serial_number: int | None = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True),
    )
    id: str = Field(
        default_factory=lambda: str(uuid4()),
        sa_column=Column(String(36), unique=True, nullable=False),
    )
    email: str = Field(sa_column=Column(String(255), nullable=False))
    password_hash: str | None = Field(
        default=None, sa_column=Column(String(255), nullable=True)
    )
    provider: str = Field(
        default="local",
        sa_column=Column(String(20), nullable=False, server_default=text("'local'")),
    )
    provider_key: str | None = Field(
        default=None, sa_column=Column(String(255), nullable=True)
    )
    nickname: str | None = Field(
        default=None, sa_column=Column(String(32), nullable=True)
    )
    profile: str | None = Field(default=None, sa_column=Column(Text, nullable=True))
    interest1: str | None = Field(
        default=None, sa_column=Column(String(50), nullable=True)
    )
    interest2: str | None = Field(
        default=None, sa_column=Column(String(50), nullable=True)
    )
    suspend_expire_at: datetime | None = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )
    created_at: datetime | None = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        ),
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        ),
    )
    deleted_at: datetime | None = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )
