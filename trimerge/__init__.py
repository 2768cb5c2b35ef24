"""
trimerge: line-based three-way text merge.
"""

__version__ = "1.0.0"

from trimerge.core.merge.three_way import ThreeWayMergeEngine, merge
from trimerge.core.models import (
    Add,
    Author,
    Conflict,
    Difference,
    MergeResult,
    Modify,
    NotChanged,
    Remove,
)

__all__ = [
    'merge',
    'ThreeWayMergeEngine',
    'Author',
    'Difference',
    'NotChanged',
    'Add',
    'Remove',
    'Modify',
    'Conflict',
    'MergeResult',
]
