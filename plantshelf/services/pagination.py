import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    total_count: int
    current_page: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """
    Slice ``items`` to the 1-based ``page`` of ``page_size`` entries.

    A page past the end yields an empty slice; the metadata still describes
    the full sequence. ``page`` and ``page_size`` are validated upstream.
    """
    total = len(items)
    total_pages = math.ceil(total / page_size) if total else 0
    start = (page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        total_count=total,
        current_page=page,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_previous_page=page > 1,
    )
