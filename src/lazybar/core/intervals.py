"""
Interval Math - Inclusive Integer Index Ranges

This module provides the IndexRange value type and the pure helpers used by
the range cache: length, overlap test and splitting around a hole.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class IndexRange:
    """Inclusive range of item indices. Empty when ``last < first``."""
    first: int
    last: int

    @property
    def is_empty(self) -> bool:
        return self.last < self.first

    @property
    def length(self) -> int:
        return length(self)

    def __contains__(self, index: int) -> bool:
        return self.first <= index <= self.last

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.first, self.last + 1))

    def __str__(self) -> str:
        if self.is_empty:
            return "[]"
        return f"[{self.first}, {self.last}]"


IndexRange.EMPTY = IndexRange(1, 0)


def length(index_range: IndexRange) -> int:
    """Number of indices in the range, 0 for empty or reversed input."""
    return max(0, index_range.last - index_range.first + 1)


def overlaps(a: IndexRange, b: IndexRange) -> bool:
    """True iff both ranges are non-empty and share at least one index."""
    if a.is_empty or b.is_empty:
        return False
    return a.first <= b.last and b.first <= a.last


def split_around(index_range: IndexRange, hole: IndexRange) -> Tuple[IndexRange, IndexRange]:
    """
    Split a range around a hole.

    Args:
        index_range: The outer range
        hole: The range being cut out

    Returns:
        Tuple of (top, bottom) remainders, either of which may be empty
    """
    top = IndexRange(index_range.first, hole.first - 1)
    bottom = IndexRange(hole.last + 1, index_range.last)
    return top, bottom
