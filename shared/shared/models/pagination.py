import math
from typing import Generic, TypeVar

from pydantic import Field

from shared.models.base import CamelModel

T = TypeVar("T")

MAX_PAGE_SIZE = 100


class Page(CamelModel, Generic[T]):
    """Offset-paginated list response.

    Serialized as ``{data, total, page, limit, totalPages, hasNext, hasPrev}``.
    """

    data: list[T]
    total: int = Field(description="Total number of matching records.")
    page: int = Field(description="Current page number (1-indexed).")
    limit: int = Field(description="Number of items per page.")
    total_pages: int = Field(description="ceil(total / limit); 0 when there are no records.")
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, data: list[T], total: int, page: int, limit: int) -> "Page[T]":
        total_pages = math.ceil(total / limit) if limit else 0
        return cls(
            data=data,
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit
