"""
Pairwise block matching between token sequences.

Wraps a longest-common-subsequence block matcher so that the end-of-text
sentinel of both sequences is always matched as its own run. The merge
engine relies on that final run as a guaranteed synchronization point.
"""

from __future__ import annotations

import difflib
from typing import Callable, Sequence

from trimerge.core.diff.interner import SENTINEL
from trimerge.core.models import MatchRun, MergeInvariantError

# Any callable returning maximal, non-overlapping matching runs ordered by
# position in both sequences, terminated by a zero-length run at
# (len(a), len(b), 0), can stand in for the default.
BlockMatchFunction = Callable[[Sequence[int], Sequence[int]], list[MatchRun]]


def sequence_matcher_blocks(a: Sequence[int], b: Sequence[int]) -> list[MatchRun]:
    """Matching runs from :class:`difflib.SequenceMatcher`."""
    matcher = difflib.SequenceMatcher(None, a, b, autojunk=False)
    return [MatchRun(*block) for block in matcher.get_matching_blocks()]


def _check_terminated(tokens: Sequence[int], name: str) -> None:
    if not tokens or tokens[-1] != SENTINEL:
        raise MergeInvariantError(f"{name} sequence must end with the sentinel token")


def get_matching_blocks(
    base: Sequence[int],
    other: Sequence[int],
    match: BlockMatchFunction = sequence_matcher_blocks
) -> list[MatchRun]:
    """
    Match ``other`` against ``base``, anchoring the trailing sentinels.

    The returned runs end with a length-1 run pairing both sentinels, then a
    zero-length run one position past both ends.
    """
    _check_terminated(base, "base")
    _check_terminated(other, "other")

    base_len = len(base) - 1
    other_len = len(other) - 1

    runs = list(match(base[:base_len], other[:other_len]))
    if not runs or runs[-1].length != 0:
        raise MergeInvariantError("block matcher must end with a zero-length run")
    runs.pop()

    runs.append(MatchRun(base_len, other_len, 1))
    runs.append(MatchRun(base_len + 1, other_len + 1, 0))
    return runs
