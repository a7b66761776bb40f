"""Password hashing and one-time code helpers."""

from __future__ import annotations

import secrets

import bcrypt


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def generate_numeric_code(length: int) -> str:
    """Return a uniformly random decimal code of the given length."""
    if length <= 0:
        raise ValueError("length must be positive")
    return "".join(secrets.choice("0123456789") for _ in range(length))
