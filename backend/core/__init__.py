"""Core configuration and security helpers."""

from .config import Settings, settings
from .security import generate_numeric_code, hash_password

__all__ = [
    "Settings",
    "settings",
    "hash_password",
    "generate_numeric_code",
]
