"""
Tests for the inclusive index range helpers.
"""

from lazybar.core.intervals import IndexRange, length, overlaps, split_around


class TestIndexRange:
    """Test IndexRange basics."""

    def test_length(self):
        assert length(IndexRange(0, 4)) == 5
        assert length(IndexRange(3, 3)) == 1
        assert IndexRange(2, 7).length == 6

    def test_length_of_reversed_range_is_zero(self):
        assert length(IndexRange(5, 2)) == 0
        assert length(IndexRange.EMPTY) == 0

    def test_empty(self):
        assert IndexRange.EMPTY.is_empty
        assert IndexRange(4, 3).is_empty
        assert not IndexRange(4, 4).is_empty

    def test_contains_and_iter(self):
        index_range = IndexRange(2, 4)
        assert 2 in index_range
        assert 4 in index_range
        assert 5 not in index_range
        assert list(index_range) == [2, 3, 4]
        assert list(IndexRange.EMPTY) == []

    def test_equality(self):
        assert IndexRange(1, 3) == IndexRange(1, 3)
        assert IndexRange(1, 3) != IndexRange(1, 4)


class TestOverlaps:
    """Test the overlap check."""

    def test_overlapping_ranges(self):
        assert overlaps(IndexRange(0, 5), IndexRange(5, 9))
        assert overlaps(IndexRange(3, 6), IndexRange(0, 9))
        assert overlaps(IndexRange(0, 9), IndexRange(3, 6))

    def test_disjoint_ranges(self):
        assert not overlaps(IndexRange(0, 4), IndexRange(5, 9))
        assert not overlaps(IndexRange(10, 12), IndexRange(0, 4))

    def test_empty_never_overlaps(self):
        assert not overlaps(IndexRange.EMPTY, IndexRange(0, 9))
        assert not overlaps(IndexRange(0, 9), IndexRange(5, 4))


class TestSplitAround:
    """Test splitting a range around a hole."""

    def test_hole_in_the_middle(self):
        top, bottom = split_around(IndexRange(0, 9), IndexRange(3, 6))
        assert top == IndexRange(0, 2)
        assert bottom == IndexRange(7, 9)

    def test_hole_covering_the_start(self):
        top, bottom = split_around(IndexRange(3, 9), IndexRange(0, 5))
        assert top.is_empty
        assert bottom == IndexRange(6, 9)

    def test_hole_covering_the_end(self):
        top, bottom = split_around(IndexRange(0, 5), IndexRange(4, 12))
        assert top == IndexRange(0, 3)
        assert bottom.is_empty

    def test_hole_covering_everything(self):
        top, bottom = split_around(IndexRange(2, 4), IndexRange(0, 9))
        assert top.is_empty
        assert bottom.is_empty
