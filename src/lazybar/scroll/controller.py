"""
Scroll Controller - Adapter Between the Estimator and a Scrollbar Widget

This module provides the ScrollController class a scrollbar widget talks to.
It reports the estimated scroll offset and maximum offset of a lazily laid
out list and forwards scroll requests to the list host.
"""

import asyncio
from typing import Callable, Optional, Protocol, Set, Union

from loguru import logger

from ..config import ScrollbarConfig
from ..core.estimator import SimpleSizeEstimator, SizeEstimate, SizeEstimator
from ..core.layout import LayoutSnapshot
from .thumb import ThumbGeometry

Estimator = Union[SizeEstimator, SimpleSizeEstimator]


class ListHost(Protocol):
    """The lazily laid out list a controller estimates and scrolls."""

    def layout_info(self) -> LayoutSnapshot:
        """Visible items, viewport bounds and item count of the latest layout pass."""
        ...

    async def scroll_by(self, delta: float) -> float:
        """Scroll by ``delta`` and return the distance actually scrolled."""
        ...


class ScrollController:
    """
    Scrollbar adapter for a list whose item sizes are only known when visible.

    Scroll requests are serialized: a request issued while another one is in
    flight waits for it to finish. ``scroll_to`` reads the current offset only
    once it is its turn, so queued absolute requests land where they should.
    After ``dispose`` every pending or new request resolves to a no-op.
    """

    def __init__(
        self,
        host: ListHost,
        config: Optional[ScrollbarConfig] = None,
        estimator: Optional[Estimator] = None
    ):
        """
        Initialize the scroll controller.

        Args:
            host: The list host to estimate and scroll
            config: Scrollbar configuration
            estimator: Estimator to use instead of the one chosen by ``config``
        """
        self.host = host
        self.config = config or ScrollbarConfig()

        if estimator is None:
            if self.config.use_range_cache:
                estimator = SizeEstimator(
                    split_rounding=self.config.split_rounding,
                    verify_invariants=self.config.verify_invariants,
                )
            else:
                estimator = SimpleSizeEstimator()
        self.estimator = estimator

        self._scroll_lock = asyncio.Lock()
        self._pending: Set[asyncio.Future] = set()
        self._disposed = False

        logger.info(f"ScrollController initialized with {type(self.estimator).__name__}")

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def is_scrolling(self) -> bool:
        return bool(self._pending)

    def estimate(self) -> Optional[SizeEstimate]:
        """Estimate for the host's current layout, None without visible items."""
        if self._disposed:
            return None
        return self.estimator.estimate(self.host.layout_info())

    def scroll_offset(self) -> float:
        """Estimated distance from the content start to the viewport start."""
        estimate = self.estimate()
        if estimate is None:
            return 0.0
        return estimate.offset_above_first_visible

    def max_scroll_offset(self, container_size: float) -> float:
        """
        Estimated content extent minus ``container_size``.

        Negative when the content is shorter than the container; callers clamp.
        """
        estimate = self.estimate()
        total_extent = estimate.total_extent if estimate is not None else 0.0
        return total_extent - container_size

    def thumb(self, track_length: float) -> ThumbGeometry:
        """Thumb position and extent on a track of ``track_length``."""
        estimate = self.estimate()
        if estimate is None:
            return ThumbGeometry.full(track_length, self.config.thickness)
        return ThumbGeometry.compute(
            estimate,
            estimate.offset_above_first_visible,
            track_length,
            self.config.min_thumb_size,
            self.config.thickness,
        )

    async def scroll_by(self, delta: float) -> float:
        """
        Scroll the host by ``delta``.

        Returns:
            The distance the host actually scrolled, 0.0 if disposed
        """
        return await self._request(lambda: delta)

    async def scroll_to(self, container_size: float, scroll_offset: float) -> float:
        """Scroll so that the estimated offset becomes ``scroll_offset``."""
        return await self._request(lambda: scroll_offset - self.scroll_offset())

    def reset(self) -> None:
        """Drop cached measurements, e.g. after the list content was replaced."""
        self.estimator.reset()

    def dispose(self) -> None:
        """Cancel the in-flight scroll and turn all further requests into no-ops."""
        if self._disposed:
            return

        self._disposed = True
        for future in list(self._pending):
            future.cancel()
        self.estimator.reset()
        logger.info("ScrollController disposed")

    async def _request(self, compute_delta: Callable[[], float]) -> float:
        if self._disposed:
            logger.debug("Ignoring scroll request on disposed controller")
            return 0.0

        async with self._scroll_lock:
            if self._disposed:
                logger.debug("Dropping queued scroll request, controller disposed")
                return 0.0

            delta = compute_delta()
            future = asyncio.ensure_future(self.host.scroll_by(delta))
            self._pending.add(future)
            try:
                scrolled = await future
            except asyncio.CancelledError:
                if self._disposed and future.cancelled():
                    logger.debug("Scroll request cancelled by dispose")
                    return 0.0
                raise
            finally:
                self._pending.discard(future)

            logger.debug(f"Scrolled by {scrolled} (requested {delta})")
            return scrolled
