"""Tests for half-open base ranges."""

import pytest

from trimerge.core.models import MergeInvariantError
from trimerge.core.range import Range


class TestRangeBasics:
    def test_start_is_empty_at_zero(self):
        assert Range.START == Range(0, 0)
        assert Range.START.is_empty

    def test_length(self):
        assert len(Range(2, 5)) == 3
        assert len(Range(4, 4)) == 0

    def test_start_past_end_rejected(self):
        with pytest.raises(MergeInvariantError):
            Range(3, 2)

    def test_slice(self):
        assert Range(1, 3).slice([10, 11, 12, 13]) == [11, 12]
        assert Range(2, 2).slice([10, 11, 12]) == []


class TestIntersect:
    def test_overlap(self):
        assert Range(0, 5).intersect(Range(3, 8)) == Range(3, 5)

    def test_is_symmetric(self):
        assert Range(3, 8).intersect(Range(0, 5)) == Range(3, 5)

    def test_nested(self):
        assert Range(0, 10).intersect(Range(2, 4)) == Range(2, 4)

    def test_adjacent_has_no_intersection(self):
        assert Range(0, 3).intersect(Range(3, 6)) is None

    def test_disjoint(self):
        assert Range(0, 2).intersect(Range(5, 6)) is None

    def test_empty_range_never_intersects(self):
        assert Range(2, 2).intersect(Range(0, 5)) is None


class TestContains:
    def test_contains_inner(self):
        assert Range(0, 10).contains(Range(2, 4))

    def test_contains_itself(self):
        assert Range(2, 4).contains(Range(2, 4))

    def test_does_not_contain_outer(self):
        assert not Range(2, 4).contains(Range(0, 10))

    def test_partial_overlap(self):
        assert not Range(0, 5).contains(Range(3, 8))

    def test_empty_range_at_boundary(self):
        assert Range(0, 3).contains(Range(0, 0))
        assert Range(0, 3).contains(Range(3, 3))
        assert not Range(1, 3).contains(Range(0, 0))


class TestGapBetween:
    def test_gap_after(self):
        assert Range(5, 7).gap_between(Range(0, 2)) == Range(2, 5)

    def test_gap_before(self):
        assert Range(0, 2).gap_between(Range(5, 7)) == Range(2, 5)

    def test_adjacent_ranges_have_no_gap(self):
        assert Range(3, 5).gap_between(Range(0, 3)) is None
        assert Range(0, 3).gap_between(Range(3, 5)) is None

    def test_overlap_has_no_gap(self):
        assert Range(0, 5).gap_between(Range(3, 8)) is None

    def test_containment_has_no_gap(self):
        assert Range(0, 10).gap_between(Range(2, 4)) is None
        assert Range(2, 4).gap_between(Range(0, 10)) is None

    def test_empty_start_inside_range(self):
        assert Range(0, 2).gap_between(Range.START) is None

    def test_gap_from_start(self):
        assert Range(3, 4).gap_between(Range.START) == Range(0, 3)


class TestShift:
    def test_positive_offset(self):
        assert Range(2, 4).shift(3) == Range(5, 7)

    def test_negative_offset(self):
        assert Range(5, 7).shift(-2) == Range(3, 5)

    def test_zero_offset(self):
        assert Range(1, 2).shift(0) == Range(1, 2)
