"""
Diff module for token-level sequence matching.

Provides:
- Line interning (text to integer tokens and back)
- Sentinel-anchored pairwise block matching
"""

from trimerge.core.diff.interner import (
    LineInterner,
    SENTINEL,
    split_lines,
)
from trimerge.core.diff.matcher import (
    BlockMatchFunction,
    get_matching_blocks,
    sequence_matcher_blocks,
)

__all__ = [
    # Interning
    'LineInterner',
    'SENTINEL',
    'split_lines',
    # Matching
    'BlockMatchFunction',
    'get_matching_blocks',
    'sequence_matcher_blocks',
]
