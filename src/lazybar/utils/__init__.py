"""
Utility helpers for lazybar.
"""

from .logging import setup_logging

__all__ = ["setup_logging"]
