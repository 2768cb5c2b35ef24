"""Tests for sentinel-anchored block matching."""

import pytest

from trimerge.core.diff.interner import SENTINEL, LineInterner
from trimerge.core.diff.matcher import get_matching_blocks, sequence_matcher_blocks
from trimerge.core.models import MatchRun, MergeInvariantError


class TestSequenceMatcherBlocks:
    def test_terminated_by_zero_length_run(self):
        runs = sequence_matcher_blocks([1, 2, 3], [1, 4, 3])
        assert runs == [MatchRun(0, 0, 1), MatchRun(2, 2, 1), MatchRun(3, 3, 0)]

    def test_frequent_tokens_are_not_junked(self):
        # More than 200 items would trigger difflib's popularity heuristic
        a = [1] * 300
        b = [1] * 300
        assert sequence_matcher_blocks(a, b)[0] == MatchRun(0, 0, 300)


class TestGetMatchingBlocks:
    def test_sentinel_runs_appended(self):
        runs = get_matching_blocks([1, 2, 3, SENTINEL], [1, 4, 3, SENTINEL])
        assert runs == [
            MatchRun(0, 0, 1),
            MatchRun(2, 2, 1),
            MatchRun(3, 3, 1),
            MatchRun(4, 4, 0),
        ]

    def test_empty_texts(self):
        assert get_matching_blocks([SENTINEL], [SENTINEL]) == [
            MatchRun(0, 0, 1),
            MatchRun(1, 1, 0),
        ]

    def test_different_lengths(self):
        runs = get_matching_blocks([1, 2, SENTINEL], [3, 1, 2, 4, 5, SENTINEL])
        assert runs == [
            MatchRun(0, 1, 2),
            MatchRun(2, 5, 1),
            MatchRun(3, 6, 0),
        ]

    def test_nothing_in_common(self):
        runs = get_matching_blocks([1, 2, SENTINEL], [3, SENTINEL])
        assert runs == [MatchRun(2, 1, 1), MatchRun(3, 2, 0)]

    def test_runs_are_ordered_and_match(self):
        interner = LineInterner()
        base = interner.intern("a\nb\nc\nd\ne\nf\n")
        other = interner.intern("a\nx\nc\nd\ny\nf\ng\n")
        runs = get_matching_blocks(base, other)

        for prev, run in zip(runs, runs[1:]):
            assert prev.base_end <= run.base_start
            assert prev.other_end <= run.other_start
        for run in runs:
            assert base[run.base_start:run.base_end] == other[run.other_start:run.other_end]

        assert runs[-2] == MatchRun(len(base) - 1, len(other) - 1, 1)
        assert runs[-1] == MatchRun(len(base), len(other), 0)

    def test_custom_match_function(self):
        calls = []

        def match(a, b):
            calls.append((list(a), list(b)))
            return [MatchRun(len(a), len(b), 0)]

        runs = get_matching_blocks([1, 2, SENTINEL], [1, SENTINEL], match)
        assert calls == [([1, 2], [1])]
        assert runs == [MatchRun(2, 1, 1), MatchRun(3, 2, 0)]

    def test_missing_sentinel(self):
        with pytest.raises(MergeInvariantError):
            get_matching_blocks([1, 2], [1, SENTINEL])
        with pytest.raises(MergeInvariantError):
            get_matching_blocks([SENTINEL], [])

    def test_match_function_without_terminator(self):
        with pytest.raises(MergeInvariantError):
            get_matching_blocks([1, SENTINEL], [1, SENTINEL], lambda a, b: [MatchRun(0, 0, 1)])


class TestMatchRun:
    def test_offsets(self):
        run = MatchRun(2, 5, 3)
        assert run.base_end == 5
        assert run.other_end == 8
        assert run.offset == 3
