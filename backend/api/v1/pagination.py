"""Shared page-number query parameters."""

from typing import Annotated

from fastapi import Query

from core import settings
from services.pagination import PageRequest

MAX_PAGE_SIZE = settings.max_page_size


def page_params(
    page: Annotated[int, Query(ge=1)] = 1,
    size: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = settings.default_page_size,
) -> PageRequest:
    return PageRequest(page=page, size=size)
