"""Domain model for scanned disk-usage trees.

This package contains non-UI tree primitives:
- entry datatype carrying name, aggregate size and stat-error flag
- arena graph with single-parent edges and stable node indices
- sort modes and the sorted-children view used by navigation
"""

from __future__ import annotations

from .types import EntryData, NodeIndex
from .graph import Tree
from .sorting import SortMode, SortPolicy, name_sort_key, sorted_entries

__all__ = [
    "EntryData",
    "NodeIndex",
    "Tree",
    "SortMode",
    "SortPolicy",
    "name_sort_key",
    "sorted_entries",
]
