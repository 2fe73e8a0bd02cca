"""Pagination schemas and helpers."""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100


class PageParams(BaseModel):
    """Page selection for list endpoints."""

    page: int = Field(1, ge=1)
    per_page: int = Field(DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.per_page


class PageInfo(BaseModel):
    """Pagination metadata."""

    page: int
    per_page: int
    total_records: int
    total_pages: int


class Page(BaseModel, Generic[T]):
    """Generic paginated response."""

    items: list[T]
    pagination: PageInfo


def total_pages(total_records: int, per_page: int) -> int:
    """Number of pages needed for ``total_records``, never less than one."""
    return max(1, math.ceil(total_records / per_page))


def build_page_info(params: PageParams, total_records: int) -> PageInfo:
    return PageInfo(
        page=params.page,
        per_page=params.per_page,
        total_records=total_records,
        total_pages=total_pages(total_records, params.per_page),
    )
