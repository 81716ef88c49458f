#!/usr/bin/env python3
"""
Property-based tests for the range cache invariants.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from hypothesis.strategies import composite

from lazybar.core.intervals import IndexRange
from lazybar.core.range_cache import RangeCache

from .conftest import make_items


@composite
def scroll_session(draw, uniform: bool = False):
    """A list of item sizes and a sequence of visible windows over it."""
    item_count = draw(st.integers(min_value=1, max_value=60))
    if uniform:
        size = draw(st.integers(min_value=1, max_value=50))
        sizes = [size] * item_count
    else:
        sizes = draw(
            st.lists(
                st.integers(min_value=0, max_value=100),
                min_size=item_count,
                max_size=item_count,
            )
        )

    windows = []
    for _ in range(draw(st.integers(min_value=1, max_value=25))):
        first = draw(st.integers(min_value=0, max_value=item_count - 1))
        count = draw(st.integers(min_value=1, max_value=12))
        windows.append(IndexRange(first, min(item_count - 1, first + count - 1)))
    return sizes, windows


def window_items(sizes, window):
    return make_items(window.first, sizes[window.first:window.last + 1])


def covered_indices(cache, window):
    covered = set(window)
    for entry in cache.entries:
        covered.update(entry.range)
    return covered


@pytest.mark.property
class TestRangeCacheProperties:
    """Invariants that hold after any sequence of reconcile calls."""

    @given(scroll_session())
    @settings(max_examples=200, deadline=None)
    def test_entries_sorted_disjoint_and_merged(self, session):
        sizes, windows = session
        cache = RangeCache()

        for window in windows:
            cache.reconcile(window_items(sizes, window))
            cache.verify(window)

            for entry in cache.entries:
                assert entry.size >= 0
            for previous, entry in zip(cache.entries, cache.entries[1:]):
                assert previous.range.last + 1 < entry.range.first

    @given(scroll_session())
    @settings(max_examples=100, deadline=None)
    def test_reconcile_is_idempotent(self, session):
        sizes, windows = session
        cache = RangeCache()

        for window in windows:
            cache.reconcile(window_items(sizes, window))
            entries = cache.entries

            assert not cache.reconcile(window_items(sizes, window))
            assert cache.entries == entries

    @given(scroll_session(uniform=True))
    @settings(max_examples=100, deadline=None)
    def test_uniform_sizes_are_conserved(self, session):
        sizes, windows = session
        size = sizes[0]
        cache = RangeCache()

        for window in windows:
            cache.reconcile(window_items(sizes, window))

            assert cache.known_size == size * cache.known_count

    @given(scroll_session(uniform=True))
    @settings(max_examples=100, deadline=None)
    def test_coverage_never_shrinks(self, session):
        sizes, windows = session
        cache = RangeCache()
        seen = set()

        for window in windows:
            cache.reconcile(window_items(sizes, window))
            seen.update(window)

            assert covered_indices(cache, window) == seen

    @given(scroll_session())
    @settings(max_examples=100, deadline=None)
    def test_cached_ranges_never_include_unseen_indices(self, session):
        sizes, windows = session
        cache = RangeCache()
        seen = set()

        for window in windows:
            cache.reconcile(window_items(sizes, window))
            seen.update(window)

            assert covered_indices(cache, window) <= seen
