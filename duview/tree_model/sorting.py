"""Sibling ordering for the browser view."""

from __future__ import annotations

import os
from enum import Enum

from .graph import Tree
from .types import EntryData, NodeIndex


class SortMode(Enum):
    ALPHABETICAL = "name"
    SIZE_ASCENDING = "size-asc"
    SIZE_DESCENDING = "size-desc"

    def toggled(self) -> SortMode:
        """Next mode in the name -> size ascending -> size descending cycle."""
        return _TOGGLE_ORDER[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_TOGGLE_ORDER = {
    SortMode.ALPHABETICAL: SortMode.SIZE_ASCENDING,
    SortMode.SIZE_ASCENDING: SortMode.SIZE_DESCENDING,
    SortMode.SIZE_DESCENDING: SortMode.ALPHABETICAL,
}

_LABELS = {
    SortMode.ALPHABETICAL: "name",
    SortMode.SIZE_ASCENDING: "size ascending",
    SortMode.SIZE_DESCENDING: "size descending",
}


class SortPolicy:
    """Session-wide active sort mode."""

    def __init__(self, mode: SortMode = SortMode.ALPHABETICAL) -> None:
        self.mode = mode

    def toggle(self) -> SortMode:
        self.mode = self.mode.toggled()
        return self.mode

    def __repr__(self) -> str:
        return f"SortPolicy({self.mode!r})"


def name_sort_key(entry: EntryData) -> bytes:
    """Locale-independent byte key for ``entry.name``."""
    return os.fsencode(entry.name)


def sorted_entries(
    tree: Tree,
    node_idx: NodeIndex,
    sorting: SortMode,
) -> list[tuple[NodeIndex, EntryData]]:
    """Return direct children of ``node_idx`` ordered under ``sorting``.

    Size modes break ties by name so the order is deterministic.
    """
    entries = [(child, tree.node(child)) for child in tree.children(node_idx)]
    if sorting is SortMode.ALPHABETICAL:
        entries.sort(key=lambda item: name_sort_key(item[1]))
    elif sorting is SortMode.SIZE_ASCENDING:
        entries.sort(key=lambda item: (item[1].size, name_sort_key(item[1])))
    else:
        entries.sort(key=lambda item: (-item[1].size, name_sort_key(item[1])))
    return entries


__all__ = ["SortMode", "SortPolicy", "name_sort_key", "sorted_entries"]
