"""
lazybar - Estimated Scrollbars for Lazily Rendered Lists

Estimates the scroll offset and content extent of a list whose item sizes are
only known while the items are visible, remembering the sizes of ranges that
scrolled out of view.

Basic Usage:
    from lazybar import ScrollController, VirtualListHost

    host = VirtualListHost(headless=True, viewport_height=400)
    host.replace_items({"height": h} for h in heights)
    controller = ScrollController(host)
    controller.scroll_offset(), controller.max_scroll_offset(400)
"""

__version__ = "0.1.0"
__author__ = "David Irvine"
__description__ = "Estimated scrollbars for lazily rendered lists with variable item sizes"

from .config import ScrollbarConfig, SplitRounding
from .core import (
    IndexRange,
    LayoutSnapshot,
    RangeCache,
    RangeEntry,
    SimpleSizeEstimator,
    SizeEstimate,
    SizeEstimator,
    VisibleItem,
)
from .errors import (
    CacheInvariantError,
    ConfigurationError,
    EmptyLayoutError,
    LazybarError,
)
from .gui import VirtualListHost
from .scroll import ListHost, ScrollController, ThumbGeometry

__all__ = [
    "ScrollbarConfig",
    "SplitRounding",
    "IndexRange",
    "LayoutSnapshot",
    "VisibleItem",
    "RangeCache",
    "RangeEntry",
    "SizeEstimate",
    "SizeEstimator",
    "SimpleSizeEstimator",
    "LazybarError",
    "CacheInvariantError",
    "ConfigurationError",
    "EmptyLayoutError",
    "ListHost",
    "ScrollController",
    "ThumbGeometry",
    "VirtualListHost",
]
