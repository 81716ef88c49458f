"""
GUI Components for lazybar

Reference implementation of a lazily laid out list host.
"""

from .virtual_list import VirtualListHost, VirtualListItem

__all__ = ["VirtualListHost", "VirtualListItem"]
