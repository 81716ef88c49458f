"""
Scrollbar Estimation Demo

Scrolls through lists of differently sized items and logs how close the
simple and the caching estimators get to the real offset and content size.
"""

from enum import Enum
from typing import Dict, List

from loguru import logger

from .config import ScrollbarConfig
from .gui.virtual_list import VirtualListHost
from .scroll.controller import ScrollController

ITEM_COUNT = 50


class ItemSizing(Enum):
    """Item size profiles, each with a description and the item heights."""
    FIXED = ("Items with a fixed size", [30] * ITEM_COUNT)
    GROWING = ("Items gradually increasing in size", [(i + 1) * 5 for i in range(ITEM_COUNT)])
    SHRINKING = ("Items gradually decreasing in size", [(i + 1) * 5 for i in range(ITEM_COUNT)][::-1])

    def __init__(self, desc: str, heights: List[int]):
        self.desc = desc
        self.heights = heights


async def run_profile(sizing: ItemSizing, viewport_height: float = 400, step: float = 120) -> Dict[str, float]:
    """
    Scroll one list top to bottom and back, comparing both estimators.

    Returns:
        Mean absolute offset error of each estimator
    """
    host = VirtualListHost(viewport_height=viewport_height, headless=True)
    host.replace_items({"height": height} for height in sizing.heights)

    simple = ScrollController(host, ScrollbarConfig(use_range_cache=False))
    caching = ScrollController(host, ScrollbarConfig(use_range_cache=True))

    errors = {"simple": [], "caching": []}
    for direction in (1, -1):
        while True:
            actual = host.true_scroll_offset()
            errors["simple"].append(abs(simple.scroll_offset() - actual))
            errors["caching"].append(abs(caching.scroll_offset() - actual))

            scrolled = await caching.scroll_by(direction * step)
            if scrolled == 0:
                break

    extent = host.true_content_extent()
    logger.info(
        f"{sizing.name:<9} {sizing.desc}: content {extent:.0f}px, "
        f"estimated {simple.max_scroll_offset(0):.0f}px simple / "
        f"{caching.max_scroll_offset(0):.0f}px caching"
    )

    summary = {name: sum(values) / len(values) for name, values in errors.items()}
    logger.info(
        f"{sizing.name:<9} mean offset error: {summary['simple']:.1f}px simple, "
        f"{summary['caching']:.1f}px caching"
    )

    simple.dispose()
    caching.dispose()
    host.dispose()
    return summary


async def run_demo() -> Dict[str, Dict[str, float]]:
    """Run every item size profile."""
    results = {}
    for sizing in ItemSizing:
        results[sizing.name] = await run_profile(sizing)
    return results
