"""Pure pagination arithmetic shared by the display engine"""

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class PaginationResult(Generic[T]):
    items:        list[T]
    total_pages:  int
    has_next:     bool
    has_previous: bool
    start:        int     # inclusive index into the full sequence
    end:          int     # exclusive


def total_pages(count: int, per_page: int) -> int:
    return math.ceil(count / per_page) if count else 0


def paginate(items: Sequence[T], page: int, per_page: int) -> PaginationResult[T]:
    """Slice out one 1-based page of items."""
    pages = total_pages(len(items), per_page)
    start = (page - 1) * per_page
    end = min(start + per_page, len(items))
    return PaginationResult(
        items=list(items[start:end]),
        total_pages=pages,
        has_next=page < pages,
        has_previous=page > 1,
        start=start,
        end=end,
    )


def page_window(current: int, pages: int, max_visible: int = 10) -> range:
    """Page numbers to show as buttons: at most max_visible, starting half a window before current."""
    start = max(1, current - max_visible // 2)
    end = min(pages, start + max_visible - 1)
    return range(start, end + 1)
