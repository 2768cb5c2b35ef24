"""
Core data models for the three-way merge engine.

This module defines the data structures shared across the package:
- Match runs produced by the pairwise block matcher
- The closed set of difference variants emitted by the merge engine
- Merge result and statistics containers

All models are designed to be:
- UI-agnostic (can be rendered by any frontend)
- Immutable (differences own copied text, never views into the inputs)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import NamedTuple, Optional, Union


class MergeInvariantError(AssertionError):
    """Raised when an internal merge invariant is violated."""


# =============================================================================
# Enumerations
# =============================================================================

class Author(Enum):
    """Which side of a three-way merge made a change."""
    MINE = auto()   # Changed only in mine/ours
    YOURS = auto()  # Changed only in yours/theirs
    BOTH = auto()   # Both sides made the same change


# =============================================================================
# Matching
# =============================================================================

class MatchRun(NamedTuple):
    """
    A run of identical tokens shared by base and another sequence.

    ``base[base_start:base_start + length]`` equals
    ``other[other_start:other_start + length]``.
    """
    base_start: int
    other_start: int
    length: int

    @property
    def base_end(self) -> int:
        return self.base_start + self.length

    @property
    def other_end(self) -> int:
        return self.other_start + self.length

    @property
    def offset(self) -> int:
        """Shift that maps a base position into the other sequence."""
        return self.other_start - self.base_start


# =============================================================================
# Differences
# =============================================================================

@dataclass(frozen=True)
class NotChanged:
    """Base text left untouched by both sides."""
    text: str

    @property
    def base_text(self) -> str:
        return self.text

    @property
    def merged_text(self) -> Optional[str]:
        return self.text


@dataclass(frozen=True)
class Add:
    """Text inserted by one or both sides."""
    author: Author
    text: str

    @property
    def base_text(self) -> str:
        return ""

    @property
    def merged_text(self) -> Optional[str]:
        return self.text


@dataclass(frozen=True)
class Remove:
    """Base text deleted by one or both sides."""
    author: Author
    text: str

    @property
    def base_text(self) -> str:
        return self.text

    @property
    def merged_text(self) -> Optional[str]:
        return ""


@dataclass(frozen=True)
class Modify:
    """Base text replaced by one or both sides."""
    author: Author
    old_text: str
    new_text: str

    @property
    def base_text(self) -> str:
        return self.old_text

    @property
    def merged_text(self) -> Optional[str]:
        return self.new_text


@dataclass(frozen=True)
class Conflict:
    """Base region changed differently by mine and yours."""
    base_text: str
    mine_text: str
    yours_text: str

    @property
    def merged_text(self) -> Optional[str]:
        # No single answer; the renderer decides
        return None


Difference = Union[NotChanged, Add, Remove, Modify, Conflict]


# =============================================================================
# Merge Results
# =============================================================================

@dataclass
class MergeStatistics:
    """Count of each difference variant in a merge."""
    unchanged: int = 0
    added: int = 0
    removed: int = 0
    modified: int = 0
    conflicts: int = 0

    @property
    def total_changes(self) -> int:
        return self.added + self.removed + self.modified + self.conflicts

    @classmethod
    def from_differences(cls, differences: list[Difference]) -> MergeStatistics:
        stats = cls()
        for diff in differences:
            if isinstance(diff, NotChanged):
                stats.unchanged += 1
            elif isinstance(diff, Add):
                stats.added += 1
            elif isinstance(diff, Remove):
                stats.removed += 1
            elif isinstance(diff, Modify):
                stats.modified += 1
            else:
                stats.conflicts += 1
        return stats


@dataclass
class MergeResult:
    """Complete result of a three-way merge."""
    differences: list[Difference] = field(default_factory=list)

    @property
    def conflicts(self) -> list[Conflict]:
        return [d for d in self.differences if isinstance(d, Conflict)]

    @property
    def conflict_count(self) -> int:
        return len(self.conflicts)

    @property
    def has_conflicts(self) -> bool:
        return any(isinstance(d, Conflict) for d in self.differences)

    @property
    def statistics(self) -> MergeStatistics:
        return MergeStatistics.from_differences(self.differences)

    def __iter__(self):
        return iter(self.differences)

    def __len__(self) -> int:
        return len(self.differences)
