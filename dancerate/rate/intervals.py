"""Half-open interval lookup over time-ordered analysis items."""

from __future__ import annotations

import math
from bisect import bisect_right
from typing import Sequence, TypeVar

T = TypeVar("T")


def last_started(items: Sequence[T], position: float) -> int:
    """Index of the last item whose ``start`` is <= *position*, or -1."""
    if not items or not math.isfinite(position):
        return -1
    return bisect_right(items, position, key=lambda item: item.start) - 1


def is_usable(item) -> bool:
    """True when *item* spans a positive duration."""
    return item.duration > 0


def find_enclosing(items: Sequence[T] | None, position: float) -> int:
    """Index of the item whose ``[start, start + duration)`` holds *position*.

    Returns -1 when nothing encloses the position. Items with a zero or
    negative duration never match and do not hide an earlier item that
    still covers the position.
    """
    if not items:
        return -1
    idx = last_started(items, position)
    for j in range(idx, -1, -1):
        item = items[j]
        if not is_usable(item):
            continue
        if position < item.start + item.duration:
            return j
        # Only ties on the latest start may still hold a longer item
        if item.start != items[idx].start:
            break
    return -1


def next_usable(items: Sequence[T] | None, after: int) -> T | None:
    """First item past index *after* with a positive duration, or None."""
    if not items:
        return None
    for item in items[after + 1:]:
        if is_usable(item):
            return item
    return None
