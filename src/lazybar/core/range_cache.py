"""
Range Cache - Measurements of Ranges That Scrolled Out of View

This module provides the RangeCache class. It remembers the aggregate measured
size of item ranges that were visible once and are hidden now, keeping them as
a sorted list of non-overlapping, non-adjacent entries that never intersect
the current visible range.
"""

from bisect import bisect_left
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from loguru import logger

from ..config import SplitRounding
from ..errors import CacheInvariantError, EmptyLayoutError
from .intervals import IndexRange, overlaps, split_around
from .layout import VisibleItem


@dataclass(frozen=True)
class RangeEntry:
    """Summed size of all items in ``range`` as last measured."""
    range: IndexRange
    size: float

    @property
    def length(self) -> int:
        return self.range.length

    @property
    def local_mean(self) -> float:
        return self.size / self.range.length


def _scale(size: float, part: int, total: int) -> float:
    if isinstance(size, int):
        return size * part // total
    return size * part / total


class RangeCache:
    """
    Sorted interval cache of previously visible, now hidden item ranges.

    ``reconcile`` is the only mutating operation besides ``clear``. It is
    meant to run once per layout pass with the items the host reports as
    visible.
    """

    def __init__(
        self,
        split_rounding: SplitRounding = SplitRounding.CONSERVE,
        verify_invariants: bool = False
    ):
        """
        Initialize an empty range cache.

        Args:
            split_rounding: How remaining size is shared when an entry is split
            verify_invariants: Check every invariant after each mutation
        """
        self.split_rounding = split_rounding
        self.verify_invariants = verify_invariants

        self._entries: List[RangeEntry] = []
        self.previous_visible_range: Optional[IndexRange] = None
        self.previous_visible_size: Optional[float] = None

    @property
    def entries(self) -> Tuple[RangeEntry, ...]:
        return tuple(self._entries)

    @property
    def known_size(self) -> float:
        return sum(entry.size for entry in self._entries)

    @property
    def known_count(self) -> int:
        return sum(entry.length for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RangeEntry]:
        return iter(tuple(self._entries))

    def clear(self) -> None:
        """Forget every measurement, including the previous visible window."""
        if self._entries:
            logger.debug(f"Clearing {len(self._entries)} cached ranges")
        self._entries.clear()
        self.previous_visible_range = None
        self.previous_visible_size = None

    def reconcile(self, visible_items: Sequence[VisibleItem]) -> bool:
        """
        Fold the previous visible window into the cache and evict the current one.

        Args:
            visible_items: The currently visible items, ascending by index

        Returns:
            True if the cache was updated, False if the visible range is unchanged

        Raises:
            EmptyLayoutError: If no items are visible
            CacheInvariantError: If the previous window is already cached
        """
        if not visible_items:
            logger.error("reconcile called without visible items")
            raise EmptyLayoutError(
                "Cannot reconcile an empty visible window",
                component="RangeCache",
                operation="reconcile",
            )

        visible_range = IndexRange(visible_items[0].index, visible_items[-1].index)
        visible_size = sum(item.size for item in visible_items)

        changed = visible_range != self.previous_visible_range
        if changed:
            self._evict(visible_range, visible_items)

            previous_range = self.previous_visible_range
            previous_size = self.previous_visible_size
            if previous_range is not None and previous_size is not None:
                self._insert(RangeEntry(previous_range, previous_size))
            self.previous_visible_range = visible_range

            # The previous window may still overlap the current one
            self._evict(visible_range, visible_items)
            self._merge()

            logger.debug(
                f"Reconciled visible range {visible_range}: "
                f"{len(self._entries)} cached ranges"
            )
            if self.verify_invariants:
                self.verify(visible_range)

        self.previous_visible_size = visible_size
        return changed

    def verify(self, visible_range: Optional[IndexRange] = None) -> None:
        """
        Check the cache invariants.

        Raises:
            CacheInvariantError: On the first violated invariant
        """
        for position, entry in enumerate(self._entries):
            if entry.range.is_empty:
                self._fail(f"Entry {position} has an empty range {entry.range}", "verify")
            if entry.size < 0:
                self._fail(f"Entry {position} has negative size {entry.size}", "verify")
            if visible_range is not None and overlaps(entry.range, visible_range):
                self._fail(
                    f"Entry {entry.range} overlaps visible range {visible_range}", "verify"
                )
            if position == 0:
                continue

            previous = self._entries[position - 1]
            if previous.range.last >= entry.range.first:
                self._fail(
                    f"Entries {previous.range} and {entry.range} overlap or are unsorted",
                    "verify",
                )
            if previous.range.last + 1 == entry.range.first:
                self._fail(
                    f"Entries {previous.range} and {entry.range} are adjacent but not merged",
                    "verify",
                )

    def _fail(self, message: str, operation: str) -> None:
        logger.error(f"Range cache invariant violated: {message}")
        raise CacheInvariantError(
            message,
            operation=operation,
            metadata={"entries": [(str(e.range), e.size) for e in self._entries]},
        )

    def _insert(self, entry: RangeEntry) -> None:
        position = bisect_left(self._entries, entry.range.first, key=lambda e: e.range.first)
        if position < len(self._entries) and self._entries[position].range.first == entry.range.first:
            self._fail(f"Range {entry.range} should not be cached already", "insert")
        self._entries.insert(position, entry)

    def _evict(self, visible_range: IndexRange, visible_items: Sequence[VisibleItem]) -> None:
        # Entries are disjoint and sorted, so their ends are sorted too
        index = bisect_left(self._entries, visible_range.first, key=lambda e: e.range.last)

        while index < len(self._entries):
            entry = self._entries[index]
            if visible_range.last < entry.range.first:
                break

            del self._entries[index]
            size_to_trim = sum(item.size for item in visible_items if item.index in entry.range)
            remaining_size = entry.size - size_to_trim
            if remaining_size <= 0:
                logger.debug(f"Dropping {entry.range}: visible items account for all of it")
                continue

            for part in self._split(entry.range, visible_range, remaining_size):
                self._entries.insert(index, part)
                index += 1

    def _split(
        self,
        entry_range: IndexRange,
        visible_range: IndexRange,
        remaining_size: float
    ) -> List[RangeEntry]:
        top, bottom = split_around(entry_range, visible_range)
        top_length, bottom_length = top.length, bottom.length
        total_length = top_length + bottom_length
        if total_length == 0:
            return []

        bottom_size = _scale(remaining_size, bottom_length, total_length)
        if self.split_rounding is SplitRounding.TRUNCATE:
            top_size = _scale(remaining_size, top_length, total_length)
        else:
            top_size = remaining_size - bottom_size

        parts = []
        if not top.is_empty:
            parts.append(RangeEntry(top, top_size))
        if not bottom.is_empty:
            parts.append(RangeEntry(bottom, bottom_size))
        return parts

    def _merge(self) -> None:
        index = 0
        while index < len(self._entries) - 1:
            current = self._entries[index]
            following = self._entries[index + 1]
            if current.range.last + 1 == following.range.first:
                self._entries[index] = RangeEntry(
                    IndexRange(current.range.first, following.range.last),
                    current.size + following.size,
                )
                del self._entries[index + 1]
            else:
                index += 1
