"""
Size Estimator - Mean Item Size, Content Extent and Scroll Offset

This module combines the live measurements of the visible items with the
range cache to estimate how large the whole list is and how far the first
visible item lies from the start of the content. Items that were never
measured are assumed to have the mean size of the known ones.
"""

from dataclasses import dataclass
from typing import Hashable, Optional, Tuple

from loguru import logger

from ..config import SplitRounding
from .layout import LayoutSnapshot
from .range_cache import RangeCache


@dataclass(frozen=True)
class SizeEstimate:
    """Result of one estimation pass."""
    mean_item_size: float
    total_extent: float
    offset_above_first_visible: float
    viewport_extent: float
    known_items: int

    @property
    def max_scroll_offset(self) -> float:
        return self.total_extent - self.viewport_extent


def _sub_item_offset(layout: LayoutSnapshot) -> float:
    # Positive when the first visible item is partially scrolled past the viewport start
    return layout.viewport_start_offset - layout.first_visible.offset


class SimpleSizeEstimator:
    """
    Stateless estimator using only the visible items.

    Every item that is not visible is assumed to be as large as the mean of
    the visible ones. Less accurate than SizeEstimator, but it needs no history
    and so works for the very first layout pass.
    """

    def estimate(self, layout: LayoutSnapshot) -> Optional[SizeEstimate]:
        if layout.is_empty:
            return None

        visible_count = len(layout.visible_items)
        mean = layout.visible_size / visible_count
        offset = layout.first_visible.index * mean + _sub_item_offset(layout)

        return SizeEstimate(
            mean_item_size=mean,
            total_extent=mean * layout.total_items_count,
            offset_above_first_visible=offset,
            viewport_extent=layout.viewport_extent,
            known_items=visible_count,
        )

    def distance_to(self, index: int, layout: LayoutSnapshot) -> float:
        """Estimated distance from the content start to the top of ``index``."""
        estimate = self.estimate(layout)
        if estimate is None:
            return 0.0
        return index * estimate.mean_item_size

    def reset(self) -> None:
        """Nothing to forget."""


class SizeEstimator:
    """
    Estimator backed by a RangeCache of earlier measurements.

    Each call to ``estimate`` reconciles the cache with the reported layout
    first, so it must be called at most once per layout pass with the latest
    snapshot.
    """

    def __init__(
        self,
        cache: Optional[RangeCache] = None,
        split_rounding: SplitRounding = SplitRounding.CONSERVE,
        verify_invariants: bool = False
    ):
        self.cache = cache if cache is not None else RangeCache(split_rounding, verify_invariants)
        self._fallback = SimpleSizeEstimator()
        self._content_key: Optional[Hashable] = None

    def reset(self) -> None:
        """Forget all measurements, e.g. because the list content changed."""
        self.cache.clear()
        self._content_key = None

    def update(self, layout: LayoutSnapshot) -> bool:
        """
        Bring the cache in line with ``layout``.

        Returns:
            False if there are no visible items (the cache is cleared then)
        """
        if layout.content_key != self._content_key:
            logger.debug(
                f"List content changed ({self._content_key!r} -> {layout.content_key!r}), "
                "dropping cached measurements"
            )
            self.cache.clear()
            self._content_key = layout.content_key

        if layout.is_empty:
            self.cache.clear()
            return False

        self.cache.reconcile(layout.visible_items)
        return True

    def estimate(self, layout: LayoutSnapshot) -> Optional[SizeEstimate]:
        """
        Estimate mean item size, total extent and the offset of the first visible item.

        Returns:
            The estimate, or None if no items are visible
        """
        if not self.update(layout):
            return None

        mean = self._mean_item_size(layout)
        if mean is None:
            return self._fallback.estimate(layout)

        offset = self._known_distance(layout.first_visible.index, layout, mean)
        return SizeEstimate(
            mean_item_size=mean,
            total_extent=mean * layout.total_items_count,
            offset_above_first_visible=offset + _sub_item_offset(layout),
            viewport_extent=layout.viewport_extent,
            known_items=len(layout.visible_items) + self.cache.known_count,
        )

    def distance_to(self, index: int, layout: LayoutSnapshot) -> float:
        """
        Estimated distance from the content start to the top of item ``index``.

        Sizes of cached and visible items before ``index`` are used as is; a
        cached range containing ``index`` contributes its local mean for the
        items it covers; everything else counts as the mean item size.
        """
        if not self.update(layout):
            return 0.0

        mean = self._mean_item_size(layout)
        if mean is None:
            return self._fallback.distance_to(index, layout)
        return self._known_distance(index, layout, mean)

    def _mean_item_size(self, layout: LayoutSnapshot) -> Optional[float]:
        known_count = len(layout.visible_items) + self.cache.known_count
        if known_count == 0:
            return None
        return (layout.visible_size + self.cache.known_size) / known_count

    def _known_distance(self, index: int, layout: LayoutSnapshot, mean: float) -> float:
        known_size, known_count = self._known_before(index, layout)
        return known_size + (index - known_count) * mean

    def _known_before(self, index: int, layout: LayoutSnapshot) -> Tuple[float, int]:
        known_size = 0.0
        known_count = 0
        for entry in self.cache:
            if entry.range.last < index:
                known_size += entry.size
                known_count += entry.length
            else:
                if entry.range.first < index:
                    covered = index - entry.range.first
                    known_size += entry.local_mean * covered
                    known_count += covered
                break

        for item in layout.visible_items:
            if item.index >= index:
                break
            known_size += item.size
            known_count += 1

        return known_size, known_count
