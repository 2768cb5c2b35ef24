"""
Merge module for three-way text merging.
"""

from trimerge.core.merge.three_way import (
    ThreeWayMergeEngine,
    merge,
)
from trimerge.core.merge.conflict_resolver import (
    ConflictLabels,
    ConflictMarkerParser,
    ConflictMarkerWriter,
    MergeStrategy,
    render_merge,
)

__all__ = [
    'ThreeWayMergeEngine',
    'merge',
    'ConflictLabels',
    'ConflictMarkerParser',
    'ConflictMarkerWriter',
    'MergeStrategy',
    'render_merge',
]
