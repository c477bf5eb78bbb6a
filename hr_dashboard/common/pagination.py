"""In-memory pagination for directory and roster tables."""

import math
from typing import Sequence, TypeVar

from pydantic import BaseModel

from hr_dashboard.common.constants import DEFAULT_PAGE_SIZE

T = TypeVar("T")


class PaginationMeta(BaseModel):
    """Metadata block embedded in every paginated page."""

    page: int
    page_size: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


def page_count(total: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Number of pages for *total* rows; an empty table still has one page."""
    return max(1, math.ceil(total / page_size))


def clamp_page(page: int, total: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    return max(1, min(page, page_count(total, page_size)))


def paginate_rows(
    rows: Sequence[T],
    page: int,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> tuple[list[T], PaginationMeta]:
    """
    Slice *rows* for the requested 1-indexed *page*.

    Out-of-range pages are clamped to ``[1, total_pages]`` instead of
    returning an empty slice.
    """
    if page_size < 1:
        raise ValueError("page_size must be at least 1")

    total = len(rows)
    total_pages = page_count(total, page_size)
    current = clamp_page(page, total, page_size)
    start = (current - 1) * page_size

    return list(rows[start:start + page_size]), PaginationMeta(
        page=current,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
        has_next=current < total_pages,
        has_prev=current > 1,
    )
