"""Arithmetic pagination over an already fetched, already sorted result set."""
import math
from typing import Sequence, TypeVar

T = TypeVar("T")


def total_pages(total: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    return math.ceil(total / page_size)


def paginate(items: Sequence[T], page: int, page_size: int) -> list[T]:
    """
    Return the items of a 1-based page.

    A page past the end is empty rather than an error.
    """
    if page < 1:
        raise ValueError("page must be at least 1")
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    start = (page - 1) * page_size
    return list(items[start:start + page_size])
