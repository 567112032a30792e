"""View state for the browser: which directory is shown and what is selected."""

from __future__ import annotations

from dataclasses import dataclass

from ..tree_model import NodeIndex


@dataclass(frozen=True)
class DisplayState:
    """Cursor over the tree.

    ``root`` is the node whose direct children are listed. ``selected`` is one
    of those children, or ``None`` when the root has none yet.
    """

    root: NodeIndex
    selected: NodeIndex | None = None


__all__ = ["DisplayState"]
