"""
Scroll Estimation Core

Interval math, the range cache of hidden measurements and the size estimators
built on it.
"""

from .estimator import SimpleSizeEstimator, SizeEstimate, SizeEstimator
from .intervals import IndexRange, length, overlaps, split_around
from .layout import LayoutSnapshot, VisibleItem
from .range_cache import RangeCache, RangeEntry

__all__ = [
    "IndexRange",
    "length",
    "overlaps",
    "split_around",
    "LayoutSnapshot",
    "VisibleItem",
    "RangeCache",
    "RangeEntry",
    "SizeEstimate",
    "SizeEstimator",
    "SimpleSizeEstimator",
]
