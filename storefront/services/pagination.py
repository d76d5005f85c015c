"""
Pagination helpers shared by every paginated listing
"""
import math
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


def page_window(current_page: int, total_pages: int) -> List[Optional[int]]:
    """
    Page links to render around the current page

    The first and last pages are always present, the neighbours of the
    current page are shown and gaps are marked with None (an ellipsis).

    >>> page_window(5, 10)
    [1, None, 4, 5, 6, None, 10]
    """
    if total_pages <= 1:
        return []

    pages: List[Optional[int]] = [1]

    if current_page > 3:
        pages.append(None)

    if current_page > 2:
        pages.append(current_page - 1)

    if current_page != 1:
        pages.append(current_page)

    if current_page < total_pages - 1:
        pages.append(current_page + 1)

    if current_page < total_pages - 2:
        pages.append(None)

    if current_page != total_pages:
        pages.append(total_pages)

    return pages


def total_pages_for(total: int, per_page: int) -> int:
    return max(1, math.ceil(total / per_page)) if per_page > 0 else 1


class Page(BaseModel, Generic[T]):
    """Envelope returned by paginated endpoints"""
    items: List[T]
    total: int
    page: int
    per_page: int
    total_pages: int
    window: List[Optional[int]]

    @classmethod
    def build(cls, items: List[T], total: int, page: int, per_page: int) -> "Page[T]":
        pages = total_pages_for(total, per_page)
        return cls(
            items=items,
            total=total,
            page=page,
            per_page=per_page,
            total_pages=pages,
            window=page_window(page, pages),
        )


def paginate(items: List[T], page: int, per_page: int) -> Page[T]:
    """Slice an in-memory listing into one page"""
    offset = (page - 1) * per_page
    return Page.build(items[offset:offset + per_page], len(items), page, per_page)
