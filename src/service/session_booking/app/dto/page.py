"""Pagination DTOs."""

import math
from typing import Generic, TypeVar

import attrs

from src.platform.config.core_setting import settings


_T = TypeVar('_T')


@attrs.define(frozen=True)
class PageRequest:
    """
    Normalized paging input.

    page is at least 1 and items_per_page is clamped to [1, MAX_ITEMS_PER_PAGE]
    instead of being rejected.
    """

    page: int = 1
    items_per_page: int = settings.DEFAULT_ITEMS_PER_PAGE

    @classmethod
    def of(cls, *, page: int | None = None, items_per_page: int | None = None) -> 'PageRequest':
        page = max(1, page or 1)
        if items_per_page is None:
            items_per_page = settings.DEFAULT_ITEMS_PER_PAGE
        items_per_page = min(max(1, items_per_page), settings.MAX_ITEMS_PER_PAGE)
        return cls(page=page, items_per_page=items_per_page)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.items_per_page

    @property
    def limit(self) -> int:
        return self.items_per_page


@attrs.define(frozen=True)
class Page(Generic[_T]):
    items: list[_T]
    total: int
    current_page: int
    items_per_page: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.items_per_page) if self.total else 0

    @classmethod
    def build(cls, *, items: list[_T], total: int, request: PageRequest) -> 'Page[_T]':
        return cls(
            items=items,
            total=total,
            current_page=request.page,
            items_per_page=request.items_per_page,
        )
