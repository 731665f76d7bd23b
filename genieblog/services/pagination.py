"""Fixed-size pagination over ordered listings."""

import math
from collections.abc import Sequence
from typing import Any, TypeVar

from genieblog.models.blog import Page

T = TypeVar("T")

POSTS_PER_PAGE = 10


def _as_page_number(page: Any) -> int:
    try:
        number = int(page)
    except (TypeError, ValueError, OverflowError):
        return 1
    return number if number > 0 else 1


def paginate(items: Sequence[T], page: Any = 1, page_size: int = POSTS_PER_PAGE) -> Page[T]:
    """Slice ``items`` into the requested 1-based page.

    Out-of-range requests are clamped to the nearest valid page, so page 99
    of a 3-page listing returns page 3. An empty listing still has one
    (empty) page.
    """
    size = max(1, page_size)
    total = len(items)
    total_pages = max(1, math.ceil(total / size))
    current = min(_as_page_number(page), total_pages)
    start = (current - 1) * size
    return Page(
        page=current,
        total=total,
        total_pages=total_pages,
        items=list(items[start : start + size]),
    )
