"""
lazybar - Test Configuration

Pytest configuration and shared fixtures for the lazybar tests.
"""

import sys
from pathlib import Path
from typing import List, Optional, Sequence

import pytest
from loguru import logger

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from lazybar.core.layout import LayoutSnapshot, VisibleItem


def make_items(first: int, sizes: Sequence[float], start_offset: float = 0.0) -> List[VisibleItem]:
    """Visible items starting at index ``first``, laid out back to back."""
    items = []
    offset = start_offset
    for position, size in enumerate(sizes):
        items.append(VisibleItem(index=first + position, size=size, offset=offset))
        offset += size
    return items


def make_layout(
    first: int,
    sizes: Sequence[float],
    total_items_count: int = 100,
    viewport_extent: float = 100.0,
    start_offset: float = 0.0,
    content_key: Optional[object] = None
) -> LayoutSnapshot:
    """Layout snapshot whose visible items start at index ``first``."""
    return LayoutSnapshot.of(
        make_items(first, sizes, start_offset),
        viewport_start_offset=0.0,
        viewport_end_offset=viewport_extent,
        total_items_count=total_items_count,
        content_key=content_key,
    )


class FakeListHost:
    """ListHost double with a settable layout that records scroll requests."""

    def __init__(self, layout: Optional[LayoutSnapshot] = None, gate=None):
        self.layout = layout if layout is not None else LayoutSnapshot.empty(100.0)
        self.gate = gate
        self.deltas: List[float] = []

    def layout_info(self) -> LayoutSnapshot:
        return self.layout

    async def scroll_by(self, delta: float) -> float:
        self.deltas.append(delta)
        if self.gate is not None:
            await self.gate.wait()
        return delta


@pytest.fixture
def layout_factory():
    """Provide the make_layout helper."""
    return make_layout


@pytest.fixture
def fake_host():
    """A FakeListHost without visible items."""
    return FakeListHost()


def pytest_configure(config):
    """Configure pytest for lazybar tests."""
    logger.remove()
    logger.add(
        lambda msg: print(msg, end=""),
        level="WARNING",
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}\n"
    )

    config.addinivalue_line("markers", "unit: marks unit tests")
    config.addinivalue_line("markers", "integration: marks integration tests")
    config.addinivalue_line("markers", "property: marks property-based tests")
