"""Timestamp defaults shared by models."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Microsecond-precision UTC time, assigned when the row object is built."""
    return datetime.now(timezone.utc)
