"""
Three-way merge engine for text files.

Implements a three-way merge that:
1. Interns base, mine and yours into shared line tokens
2. Matches mine against base and yours against base independently
3. Walks both match lists in lockstep over base positions
4. Classifies every gap between synchronized regions as a one-sided
   change, an identical change on both sides, or a conflict
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from trimerge.core.diff.interner import LineInterner, intern_all
from trimerge.core.diff.matcher import (
    BlockMatchFunction,
    get_matching_blocks,
    sequence_matcher_blocks,
)
from trimerge.core.models import (
    Add,
    Author,
    Conflict,
    Difference,
    MatchRun,
    MergeInvariantError,
    MergeResult,
    Modify,
    NotChanged,
    Remove,
)
from trimerge.core.range import Range

logger = logging.getLogger(__name__)


class ThreeWayMergeEngine:
    """
    Three-way merge engine.

    Holds no state between calls; every merge builds its own line table,
    so one engine may be shared by concurrent callers.
    """

    def __init__(self, match: BlockMatchFunction = sequence_matcher_blocks):
        self.match = match

    def merge(
        self,
        base_text: str,
        mine_text: str,
        yours_text: str
    ) -> list[Difference]:
        """
        Perform three-way merge.

        Args:
            base_text: Common ancestor text
            mine_text: Mine/ours version
            yours_text: Yours/theirs version

        Returns:
            Ordered differences covering the whole of base
        """
        interner = LineInterner()
        base, mine, yours = intern_all(interner, base_text, mine_text, yours_text)

        mine_runs = get_matching_blocks(base, mine, self.match)
        yours_runs = get_matching_blocks(base, yours, self.match)
        logger.debug(
            "Merging %d base, %d mine, %d yours lines (%d distinct); "
            "%d mine runs, %d yours runs",
            len(base) - 1, len(mine) - 1, len(yours) - 1, len(interner),
            len(mine_runs), len(yours_runs)
        )

        result = self._walk(interner, base, mine, yours, mine_runs, yours_runs)

        logger.debug("Merge produced %d differences", len(result))
        return result

    def merge_result(
        self,
        base_text: str,
        mine_text: str,
        yours_text: str
    ) -> MergeResult:
        """Perform three-way merge and wrap the differences in a MergeResult."""
        result = MergeResult(self.merge(base_text, mine_text, yours_text))
        if result.has_conflicts:
            logger.info("Merge left %d conflict(s)", result.conflict_count)
        return result

    def _walk(
        self,
        interner: LineInterner,
        base: Sequence[int],
        mine: Sequence[int],
        yours: Sequence[int],
        mine_runs: list[MatchRun],
        yours_runs: list[MatchRun]
    ) -> list[Difference]:
        """Synchronize both match lists over base positions."""
        ia, ib = 0, 0
        prev_common = Range.START
        prev_mine_offset = 0
        prev_yours_offset = 0

        result: list[Difference] = []
        while ia < len(mine_runs) and ib < len(yours_runs):
            a_run = mine_runs[ia]
            b_run = yours_runs[ib]
            a_block = Range(a_run.base_start, a_run.base_end)
            b_block = Range(b_run.base_start, b_run.base_end)

            common = a_block.intersect(b_block)
            if common is not None:
                o = self._changed_text(interner, base, common, prev_common, 0, 0)
                a = self._changed_text(
                    interner, mine, common, prev_common,
                    a_run.offset, prev_mine_offset
                )
                b = self._changed_text(
                    interner, yours, common, prev_common,
                    b_run.offset, prev_yours_offset
                )

                change = self._classify(o, a, b)
                if change is not None:
                    result.append(change)

                result.append(NotChanged(interner.resolve(common.slice(base))))

                prev_common = common
                prev_mine_offset = a_run.offset
                prev_yours_offset = b_run.offset

            if a_block.end < b_block.end:
                ia += 1
            else:
                ib += 1

        # The last synchronized region is the shared sentinel
        if not result or not isinstance(result[-1], NotChanged):
            raise MergeInvariantError("merge walk did not end on the sentinel run")
        result.pop()
        return result

    @staticmethod
    def _changed_text(
        interner: LineInterner,
        tokens: Sequence[int],
        common: Range,
        prev_common: Range,
        offset: int,
        prev_offset: int
    ) -> Optional[str]:
        """Text between the previous and current common region, if any."""
        gap = common.shift(offset).gap_between(prev_common.shift(prev_offset))
        if gap is None:
            return None
        return interner.resolve(gap.slice(tokens))

    @classmethod
    def _classify(
        cls,
        o: Optional[str],
        a: Optional[str],
        b: Optional[str]
    ) -> Optional[Difference]:
        """Decide who changed a gap, given its base, mine and yours text."""
        if o == b and a != b:
            return cls._detect(Author.MINE, o, a)
        if o == a and a != b:
            return cls._detect(Author.YOURS, o, b)
        if a != b:
            return Conflict(o or "", a or "", b or "")
        if o is not None or a is not None:
            # Identical text on both sides counts as one agreed change
            return cls._detect(Author.BOTH, o, a)
        return None

    @staticmethod
    def _detect(
        author: Author,
        origin: Optional[str],
        other: Optional[str]
    ) -> Difference:
        if origin is not None and other is not None:
            return Modify(author, origin, other)
        if origin is not None:
            return Remove(author, origin)
        if other is not None:
            return Add(author, other)
        raise MergeInvariantError("change with neither base nor new text")


_default_engine = ThreeWayMergeEngine()


def merge(base_text: str, mine_text: str, yours_text: str) -> list[Difference]:
    """Three-way merge of ``mine_text`` and ``yours_text`` against ``base_text``."""
    return _default_engine.merge(base_text, mine_text, yours_text)
