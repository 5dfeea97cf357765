from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from ..core.constants import DEFAULT_PAGE_SIZE

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: Sequence[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return (self.total + self.limit - 1) // self.limit

    def meta(self) -> dict:
        return {
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
        }


def page_offset(page: int, limit: int) -> int:
    return (max(int(page), 1) - 1) * int(limit)


def clamp_page(page, limit, *, default_limit: int = DEFAULT_PAGE_SIZE, max_limit: int = 100) -> tuple[int, int]:
    try:
        page = int(page or 1)
    except (TypeError, ValueError):
        page = 1
    try:
        limit = int(limit or default_limit)
    except (TypeError, ValueError):
        limit = default_limit
    return max(page, 1), min(max(limit, 1), max_limit)
