"""
Rendering of merge differences and conflict marker utilities.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from trimerge.core.models import (
    Add,
    Conflict,
    Difference,
    Modify,
    NotChanged,
    Remove,
)


class MergeStrategy(Enum):
    """Strategy for writing out conflicts."""
    MANUAL = "manual"            # Write conflict markers
    FAVOR_MINE = "mine"          # Take mine in every conflict
    FAVOR_YOURS = "yours"        # Take yours in every conflict
    FAVOR_BASE = "base"          # Keep the base text in every conflict

    @classmethod
    def from_string(cls, value: str) -> 'MergeStrategy':
        """Create from string value."""
        for strategy in cls:
            if strategy.value == value.lower():
                return strategy
        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(f"Unknown merge strategy: {value}") from None


@dataclass(frozen=True)
class ConflictLabels:
    """Names written after the conflict markers."""
    mine: str = "MINE"
    base: str = "BASE"
    yours: str = "YOURS"


class ConflictMarkerWriter:
    """
    Turns a difference list into merged text.

    Unchanged, added and modified text is written as the new text, removed
    text is dropped, and conflicts are written according to the strategy.
    """

    def __init__(
        self,
        labels: ConflictLabels | None = None,
        strategy: MergeStrategy = MergeStrategy.MANUAL,
        show_base: bool = True,
        marker_size: int = 7
    ):
        if marker_size < 1:
            raise ValueError("marker_size must be positive")
        self.labels = labels or ConflictLabels()
        self.strategy = strategy
        self.show_base = show_base
        self.marker_size = marker_size

    def render(self, differences: Iterable[Difference]) -> str:
        return ''.join(self.render_difference(diff) for diff in differences)

    def render_difference(self, diff: Difference) -> str:
        if isinstance(diff, NotChanged):
            return diff.text
        if isinstance(diff, Add):
            return diff.text
        if isinstance(diff, Modify):
            return diff.new_text
        if isinstance(diff, Remove):
            return ""
        if isinstance(diff, Conflict):
            return self.render_conflict(diff)
        raise TypeError(f"Not a merge difference: {diff!r}")

    def render_conflict(self, conflict: Conflict) -> str:
        if self.strategy == MergeStrategy.FAVOR_MINE:
            return conflict.mine_text
        if self.strategy == MergeStrategy.FAVOR_YOURS:
            return conflict.yours_text
        if self.strategy == MergeStrategy.FAVOR_BASE:
            return conflict.base_text

        parts = [
            self._marker('<', self.labels.mine),
            conflict.mine_text,
        ]
        if self.show_base:
            parts.append(self._marker('|', self.labels.base))
            parts.append(conflict.base_text)
        parts.append(self._marker('=', ""))
        parts.append(conflict.yours_text)
        parts.append(self._marker('>', self.labels.yours))
        return ''.join(parts)

    def _marker(self, char: str, label: str) -> str:
        marker = char * self.marker_size
        return f"{marker} {label}\n" if label else f"{marker}\n"


def render_merge(
    differences: Iterable[Difference],
    labels: ConflictLabels | None = None,
    strategy: MergeStrategy = MergeStrategy.MANUAL
) -> str:
    """Render differences with default marker settings."""
    return ConflictMarkerWriter(labels, strategy).render(differences)


class ConflictMarkerParser:
    """Detect conflict markers of a given size in text."""

    def __init__(self, marker_size: int = 7):
        if marker_size < 1:
            raise ValueError("marker_size must be positive")
        self.marker_size = marker_size
        self.marker_start = re.compile(rf'^<{{{marker_size}}}(?:\s.*)?$', re.MULTILINE)
        self.marker_end = re.compile(rf'^>{{{marker_size}}}(?:\s.*)?$', re.MULTILINE)

    def has_conflict_markers(self, content: str) -> bool:
        """Check if content contains conflict markers."""
        return bool(self.marker_start.search(content))

    def count_conflicts(self, content: str) -> int:
        """Count complete start/end marker pairs in content."""
        count = 0
        open_block = False
        for line in content.splitlines():
            if self.marker_start.match(line):
                open_block = True
            elif open_block and self.marker_end.match(line):
                count += 1
                open_block = False
        return count
