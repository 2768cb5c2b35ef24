"""
Half-open intervals over base-text token positions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Sequence, TypeVar

from trimerge.core.models import MergeInvariantError

T = TypeVar("T")


@dataclass(frozen=True)
class Range:
    """
    Half-open interval ``[start, end)``.

    ``start == end`` denotes an empty range positioned at ``start``.
    """
    start: int
    end: int

    START: ClassVar[Range]

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise MergeInvariantError(
                f"Range start {self.start} is past its end {self.end}"
            )

    def __len__(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def intersect(self, other: Range) -> Optional[Range]:
        """Return the overlapping part of both ranges, or None if it is empty."""
        left = max(self.start, other.start)
        right = min(self.end, other.end)
        if left < right:
            return Range(left, right)
        return None

    def contains(self, other: Range) -> bool:
        """True if ``other`` lies entirely within this range."""
        return self.start <= other.start and other.end <= self.end

    def gap_between(self, other: Range) -> Optional[Range]:
        """
        Return the interval strictly between two disjoint ranges.

        Overlapping, adjacent or nested ranges have no gap between them.
        """
        if self.contains(other) or other.contains(self):
            return None
        if self.end < other.start:
            return Range(self.end, other.start)
        if self.start > other.end:
            return Range(other.end, self.start)
        return None

    def shift(self, offset: int) -> Range:
        """Translate both endpoints by ``offset``."""
        return Range(self.start + offset, self.end + offset)

    def slice(self, sequence: Sequence[T]) -> Sequence[T]:
        return sequence[self.start:self.end]

    def __repr__(self) -> str:
        return f"Range({self.start}, {self.end})"


Range.START = Range(0, 0)
