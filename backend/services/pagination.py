"""Page-number pagination shared by every listing."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidArgumentError


@dataclass(frozen=True, slots=True)
class PageRequest:
    page: int
    size: int

    def __post_init__(self) -> None:
        if isinstance(self.page, bool) or not isinstance(self.page, int) or self.page < 1:
            raise InvalidArgumentError("page must be an integer >= 1", reason="invalid_page")
        if isinstance(self.size, bool) or not isinstance(self.size, int) or self.size < 1:
            raise InvalidArgumentError("size must be an integer >= 1", reason="invalid_page_size")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size


def total_pages(total: int, size: int) -> int:
    """Ceiling division; an empty result set has zero pages."""
    if total <= 0:
        return 0
    return -(-total // size)


__all__ = ["PageRequest", "total_pages"]
