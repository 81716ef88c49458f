"""
Scrollbar-facing adapters: the scroll controller and thumb geometry.
"""

from .controller import ListHost, ScrollController
from .thumb import ThumbGeometry

__all__ = ["ListHost", "ScrollController", "ThumbGeometry"]
