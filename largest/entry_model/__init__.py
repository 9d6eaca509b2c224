"""Domain model for ranked directory entries and tree-size aggregation.

This package contains the non-presentation primitives:
- entry/result datatypes
- iterative tree-size measurement that absorbs unreadable subpaths
"""

from __future__ import annotations

from .types import Entry, TreeSize
from .tree_size import compute_tree_size, measure_tree_size

__all__ = [
    "Entry",
    "TreeSize",
    "compute_tree_size",
    "measure_tree_size",
]
