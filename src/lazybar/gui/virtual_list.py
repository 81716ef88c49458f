"""
Virtual List Host - A Lazily Laid Out List

This module provides the VirtualListHost class, a list that only measures and
renders the items inside its viewport. It keeps its scroll position the way
lazy list layouts do, as the index of the first visible item plus how far that
item is scrolled past the viewport top, so it never needs the total content
size. It implements the ListHost protocol consumed by ScrollController.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

import toga
from loguru import logger
from toga.style import Pack
from toga.style.pack import COLUMN

from ..config import ScrollbarConfig
from ..core.layout import LayoutSnapshot, VisibleItem

MAX_POOL_SIZE = 20


@dataclass
class VirtualListItem:
    """Represents an item in the virtual list."""
    index: int
    data: Dict[str, Any]
    measured_size: Optional[float] = None
    widget: Optional[toga.Widget] = None
    is_rendered: bool = False


class VirtualListHost:
    """
    Lazily laid out vertical list.

    Item sizes come from ``measure`` the first time an item enters the
    viewport. Scrolling is clamped so the first item never leaves the viewport
    top and the last item never leaves the viewport bottom.
    Widgets scrolled out of view are pooled for reuse when an ``item_binder``
    is given.
    """

    def __init__(
        self,
        measure: Optional[Callable[[Dict[str, Any]], float]] = None,
        item_renderer: Optional[Callable[[Dict[str, Any]], toga.Widget]] = None,
        item_binder: Optional[Callable[[toga.Widget, Dict[str, Any]], None]] = None,
        viewport_height: float = 600,
        default_item_height: float = 100,
        config: Optional[ScrollbarConfig] = None,
        content_container: Optional[toga.Box] = None,
        headless: bool = False
    ):
        """
        Initialize the virtual list host.

        Args:
            measure: Function returning the size of an item from its data
            item_renderer: Function to render individual items
            item_binder: Function that rebinds a pooled widget to new item data.
                Widgets are only pooled and reused when this is given.
            viewport_height: Height of the viewport in pixels
            default_item_height: Size used by the default ``measure`` when the
                item data has no "height"
            config: Scrollbar configuration (smooth scrolling settings)
            content_container: Box receiving rendered widgets
            headless: Skip widget rendering entirely
        """
        self.measure = measure or (lambda data: data.get("height", default_item_height))
        self.item_renderer = item_renderer
        self.item_binder = item_binder
        self.viewport_height = viewport_height
        self.config = config or ScrollbarConfig()

        self.items: List[VirtualListItem] = []
        self.first_visible_index = 0
        self.first_visible_offset = 0.0
        self.content_key = 0

        self.rendered_widgets: Dict[int, toga.Widget] = {}
        self.widget_pool: List[toga.Widget] = []
        self._disposed = False

        if content_container is not None:
            self.content_container = content_container
        elif headless or item_renderer is None:
            self.content_container = None
        else:
            self.content_container = toga.Box(style=Pack(direction=COLUMN))

        logger.info(f"VirtualListHost initialized with viewport {viewport_height}")

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def add_item(self, data: Dict[str, Any]) -> None:
        """
        Append an item.

        Appending keeps every existing index valid, so measurements cached by
        a scroll controller stay usable.
        """
        self.items.append(VirtualListItem(index=len(self.items), data=data))
        self._render_visible_items()
        logger.debug(f"Added item {len(self.items) - 1}, total items: {len(self.items)}")

    def replace_items(self, items: Iterable[Dict[str, Any]]) -> None:
        """Replace the whole content and scroll back to the top."""
        self._release_all_widgets()
        self.items = [VirtualListItem(index=i, data=data) for i, data in enumerate(items)]
        self.first_visible_index = 0
        self.first_visible_offset = 0.0
        self.content_key += 1
        self._render_visible_items()
        logger.debug(f"Replaced content with {len(self.items)} items")

    def remove_item(self, index: int) -> bool:
        """
        Remove an item.

        Returns:
            True if item was removed, False if index was invalid
        """
        if index < 0 or index >= len(self.items):
            return False

        self._release_all_widgets()
        self.items.pop(index)
        for i in range(index, len(self.items)):
            self.items[i].index = i

        # Later indices shifted, earlier measurements no longer line up
        self.content_key += 1
        if self.first_visible_index >= len(self.items):
            self.first_visible_index = max(0, len(self.items) - 1)
            self.first_visible_offset = 0.0
        self._apply_scroll(0.0)
        self._render_visible_items()

        logger.debug(f"Removed item {index}, total items: {len(self.items)}")
        return True

    def clear_items(self) -> None:
        """Clear all items from the list."""
        self.replace_items([])

    def update_viewport_height(self, height: float) -> None:
        """Resize the viewport, keeping the first visible item anchored."""
        self.viewport_height = height
        self._apply_scroll(0.0)
        self._render_visible_items()

    def size_of(self, index: int) -> float:
        """Size of an item, measuring it on first use."""
        item = self.items[index]
        if item.measured_size is None:
            item.measured_size = self.measure(item.data)
        return item.measured_size

    def layout_info(self) -> LayoutSnapshot:
        """Snapshot of the current layout pass."""
        if self._disposed or not self.items:
            return LayoutSnapshot.empty(self.viewport_height, self.content_key)

        visible: List[VisibleItem] = []
        index = self.first_visible_index
        offset = -self.first_visible_offset
        while index < len(self.items) and offset < self.viewport_height:
            size = self.size_of(index)
            visible.append(VisibleItem(index=index, size=size, offset=offset))
            offset += size
            index += 1

        return LayoutSnapshot.of(
            visible,
            viewport_start_offset=0.0,
            viewport_end_offset=self.viewport_height,
            total_items_count=len(self.items),
            content_key=self.content_key,
        )

    async def scroll_by(self, delta: float) -> float:
        """
        Scroll by ``delta`` pixels.

        Returns:
            The distance actually scrolled after clamping at the list ends
        """
        if self._disposed:
            return 0.0

        if self.config.smooth_scroll and self.config.scroll_duration > 0:
            return await self._animate_scroll_by(delta)

        scrolled = self._apply_scroll(delta)
        self._render_visible_items()
        await asyncio.sleep(0)
        return scrolled

    def scroll_to_item(self, index: int) -> None:
        """Put item ``index`` at the viewport top, as far as the list end allows."""
        if index < 0 or index >= len(self.items):
            return

        self.first_visible_index = index
        self.first_visible_offset = 0.0
        self._apply_scroll(0.0)
        self._render_visible_items()

    def dispose(self) -> None:
        """Release rendered widgets. The host reports no items afterwards."""
        if self._disposed:
            return

        self._disposed = True
        self._release_all_widgets()
        self.widget_pool.clear()
        logger.info("VirtualListHost disposed")

    def true_scroll_offset(self) -> float:
        """Exact distance from the content start to the viewport top. Measures every item above."""
        return sum(self.size_of(i) for i in range(self.first_visible_index)) + self.first_visible_offset

    def true_content_extent(self) -> float:
        """Exact content size. Measures every item."""
        return sum(self.size_of(i) for i in range(len(self.items)))

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics for the list host.

        Returns:
            Dictionary with item and rendering counts
        """
        measured = sum(1 for item in self.items if item.measured_size is not None)
        return {
            "total_items": len(self.items),
            "measured_items": measured,
            "rendered_items": len(self.rendered_widgets),
            "pooled_widgets": len(self.widget_pool),
            "first_visible_index": self.first_visible_index,
            "first_visible_offset": self.first_visible_offset,
            "viewport_height": self.viewport_height,
            "content_key": self.content_key,
        }

    def _apply_scroll(self, delta: float) -> float:
        if not self.items:
            return 0.0

        scrolled = self._move(delta)
        overscroll = self._overscroll()
        if overscroll > 0:
            scrolled += self._move(-overscroll)
        return scrolled

    def _move(self, delta: float) -> float:
        """Move the anchor by ``delta``, stopping at the content start."""
        index = self.first_visible_index
        offset = self.first_visible_offset + delta
        moved = delta

        while offset < 0 and index > 0:
            index -= 1
            offset += self.size_of(index)
        if offset < 0:
            moved -= offset
            offset = 0.0

        while index < len(self.items) - 1 and offset >= self.size_of(index):
            offset -= self.size_of(index)
            index += 1

        self.first_visible_index = index
        self.first_visible_offset = offset
        return moved

    def _overscroll(self) -> float:
        """Gap between the last item's bottom edge and the viewport bottom."""
        extent = -self.first_visible_offset
        index = self.first_visible_index
        while index < len(self.items) and extent < self.viewport_height:
            extent += self.size_of(index)
            index += 1
        return max(0.0, self.viewport_height - extent)

    async def _animate_scroll_by(self, delta: float) -> float:
        """
        Scroll by ``delta`` over ``config.scroll_duration`` with ease-out.

        Stops early when a list end is reached or the host is disposed.
        """
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        duration = self.config.scroll_duration
        requested = 0.0
        scrolled = 0.0

        try:
            while not self._disposed:
                progress = min(1.0, (loop.time() - start_time) / duration)
                eased_progress = 1 - (1 - progress) ** 3

                step = delta * eased_progress - requested
                requested += step
                moved = self._apply_scroll(step)
                scrolled += moved
                self._render_visible_items()

                if progress >= 1.0 or moved != step:
                    break
                await asyncio.sleep(self.config.frame_interval)
        except asyncio.CancelledError:
            logger.debug("Smooth scroll animation cancelled")
            raise

        return scrolled

    def _render_visible_items(self) -> None:
        """Render only the visible items."""
        if self.content_container is None or self.item_renderer is None or self._disposed:
            return

        visible_indices = [item.index for item in self.layout_info().visible_items]
        self.content_container.clear()

        for index in list(self.rendered_widgets.keys()):
            if index not in visible_indices:
                self._return_widget_to_pool(self.rendered_widgets.pop(index))
                self.items[index].widget = None
                self.items[index].is_rendered = False

        for index in visible_indices:
            item = self.items[index]
            if index not in self.rendered_widgets:
                widget = self._get_widget_from_pool_or_create(item)
                self.rendered_widgets[index] = widget
                item.widget = widget
                item.is_rendered = True
            self.content_container.add(self.rendered_widgets[index])

    def _get_widget_from_pool_or_create(self, item: VirtualListItem) -> toga.Widget:
        """Reuse a pooled widget for ``item`` or render a new one."""
        if self.widget_pool and self.item_binder is not None:
            widget = self.widget_pool.pop()
            self.item_binder(widget, item.data)
            return widget

        return self.item_renderer(item.data)

    def _return_widget_to_pool(self, widget: toga.Widget) -> None:
        # Widgets without a binder cannot be shown with other data
        if self.item_binder is not None and len(self.widget_pool) < MAX_POOL_SIZE:
            self.widget_pool.append(widget)

    def _release_all_widgets(self) -> None:
        for index, widget in self.rendered_widgets.items():
            if index < len(self.items):
                self.items[index].widget = None
                self.items[index].is_rendered = False
            self._return_widget_to_pool(widget)
        self.rendered_widgets.clear()
        if self.content_container is not None:
            self.content_container.clear()
