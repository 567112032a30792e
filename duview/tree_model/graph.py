"""Arena-backed directed tree of scanned entries.

Nodes are addressed by stable integer indices and never removed, so indices
held by the navigation layer stay valid while the scanner appends nodes.
"""

from __future__ import annotations

from collections.abc import Iterator

from .types import EntryData, NodeIndex


class Tree:
    """Directory-to-child graph with at most one parent per node."""

    def __init__(self) -> None:
        self._nodes: list[EntryData] = []
        self._children: list[list[NodeIndex]] = []
        self._parents: list[NodeIndex | None] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, idx: object) -> bool:
        return isinstance(idx, int) and 0 <= idx < len(self._nodes)

    def add_node(self, entry: EntryData) -> NodeIndex:
        """Append ``entry`` as a detached node and return its index."""
        self._nodes.append(entry)
        self._children.append([])
        self._parents.append(None)
        return len(self._nodes) - 1

    def add_edge(self, parent: NodeIndex, child: NodeIndex) -> None:
        """Link ``child`` under ``parent``.

        Raises ``ValueError`` for unknown indices, self edges, and a second
        incoming edge to ``child``.
        """
        if parent not in self or child not in self:
            raise ValueError(f"unknown node index in edge {parent} -> {child}")
        if parent == child:
            raise ValueError(f"self edge on node {child}")
        existing = self._parents[child]
        if existing is not None:
            raise ValueError(f"node {child} already has parent {existing}")
        self._parents[child] = parent
        self._children[parent].append(child)

    def node(self, idx: NodeIndex) -> EntryData:
        return self._nodes[idx]

    def parent(self, idx: NodeIndex) -> NodeIndex | None:
        """Return the source of the single incoming edge, if any."""
        return self._parents[idx]

    def children(self, idx: NodeIndex) -> tuple[NodeIndex, ...]:
        """Snapshot of direct children in insertion order."""
        return tuple(self._children[idx])

    def has_children(self, idx: NodeIndex) -> bool:
        return bool(self._children[idx])

    def node_indices(self) -> Iterator[NodeIndex]:
        return iter(range(len(self._nodes)))

    def ancestors(self, idx: NodeIndex) -> Iterator[NodeIndex]:
        """Yield parent, grandparent, ... up to the top node."""
        current = self._parents[idx]
        while current is not None:
            yield current
            current = self._parents[current]

    def path_of(self, idx: NodeIndex) -> list[str]:
        """Entry names from the top node down to ``idx`` (inclusive)."""
        names = [self._nodes[idx].name]
        names.extend(self._nodes[ancestor].name for ancestor in self.ancestors(idx))
        names.reverse()
        return names


__all__ = ["Tree"]
