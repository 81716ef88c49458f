"""
Scrollbar thumb geometry derived from a size estimate.
"""

from dataclasses import dataclass

from ..core.estimator import SizeEstimate


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class ThumbGeometry:
    """
    Where the thumb sits on a track of ``track_length``.

    ``start`` and ``extent`` run along the track, ``thickness`` across it.
    """
    start: float
    extent: float
    offset_fraction: float
    size_fraction: float
    thickness: float = 0.0

    @property
    def end(self) -> float:
        return self.start + self.extent

    @property
    def bias(self) -> float:
        """Alignment bias in [-1, 1], -1 being the top of the track."""
        return self.offset_fraction * 2 - 1

    @classmethod
    def full(cls, track_length: float, thickness: float = 0.0) -> "ThumbGeometry":
        return cls(
            start=0.0,
            extent=max(0.0, track_length),
            offset_fraction=0.0,
            size_fraction=1.0,
            thickness=thickness,
        )

    @classmethod
    def compute(
        cls,
        estimate: SizeEstimate,
        scroll_offset: float,
        track_length: float,
        min_thumb_size: float = 0.0,
        thickness: float = 0.0
    ) -> "ThumbGeometry":
        track_length = max(0.0, track_length)
        if estimate.total_extent <= 0:
            return cls.full(track_length, thickness)

        size_fraction = _clamp(estimate.viewport_extent / estimate.total_extent, 0.0, 1.0)
        scrollable = estimate.total_extent - estimate.viewport_extent
        offset_fraction = _clamp(scroll_offset / scrollable, 0.0, 1.0) if scrollable > 0 else 0.0

        extent = min(track_length, max(min_thumb_size, track_length * size_fraction))
        start = (track_length - extent) * offset_fraction
        return cls(
            start=start,
            extent=extent,
            offset_fraction=offset_fraction,
            size_fraction=size_fraction,
            thickness=thickness,
        )
