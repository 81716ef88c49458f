"""
Layout Snapshot Types

A layout snapshot is what the host list reports after each layout pass: the
visible items with their measured sizes and offsets, the viewport bounds and
the total item count.
"""

from dataclasses import dataclass
from typing import Hashable, Optional, Sequence, Tuple

from .intervals import IndexRange


@dataclass(frozen=True)
class VisibleItem:
    """A rendered item. ``offset`` is relative to the viewport start."""
    index: int
    size: float
    offset: float


@dataclass(frozen=True)
class LayoutSnapshot:
    """The visible window reported by the host for one layout pass."""
    visible_items: Tuple[VisibleItem, ...]
    viewport_start_offset: float
    viewport_end_offset: float
    total_items_count: int
    content_key: Optional[Hashable] = None

    @classmethod
    def of(
        cls,
        visible_items: Sequence[VisibleItem],
        viewport_start_offset: float,
        viewport_end_offset: float,
        total_items_count: int,
        content_key: Optional[Hashable] = None
    ) -> "LayoutSnapshot":
        return cls(
            visible_items=tuple(visible_items),
            viewport_start_offset=viewport_start_offset,
            viewport_end_offset=viewport_end_offset,
            total_items_count=total_items_count,
            content_key=content_key,
        )

    @classmethod
    def empty(
        cls,
        viewport_extent: float = 0.0,
        content_key: Optional[Hashable] = None
    ) -> "LayoutSnapshot":
        return cls((), 0.0, viewport_extent, 0, content_key)

    @property
    def is_empty(self) -> bool:
        return not self.visible_items

    @property
    def first_visible(self) -> VisibleItem:
        return self.visible_items[0]

    @property
    def visible_range(self) -> IndexRange:
        if not self.visible_items:
            return IndexRange.EMPTY
        return IndexRange(self.visible_items[0].index, self.visible_items[-1].index)

    @property
    def visible_size(self) -> float:
        return sum(item.size for item in self.visible_items)

    @property
    def viewport_extent(self) -> float:
        return self.viewport_end_offset - self.viewport_start_offset
