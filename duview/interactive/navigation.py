"""State transitions for browsing the tree.

Every transition recomputes the sorted children it needs and locates the
selection by node identity, so the tree may grow between calls without
leaving a stale selection behind. Transitions never raise; impossible moves
return the state unchanged.
"""

from __future__ import annotations

from enum import Enum

from ..tree_model import NodeIndex, SortMode, SortPolicy, Tree, sorted_entries
from .state import DisplayState


class CursorDirection(Enum):
    UP = "up"
    DOWN = "down"


def first_child(tree: Tree, node_idx: NodeIndex, sorting: SortMode) -> NodeIndex | None:
    entries = sorted_entries(tree, node_idx, sorting)
    return entries[0][0] if entries else None


def drill_up(state: DisplayState, tree: Tree, sorting: SortMode) -> DisplayState:
    """Show the parent of the current root; a no-op at the top node."""
    parent = tree.parent(state.root)
    if parent is None:
        return state
    return DisplayState(root=parent, selected=first_child(tree, parent, sorting))


def drill_down(state: DisplayState, tree: Tree, sorting: SortMode) -> DisplayState:
    """Make the selected entry the new root, unless it has no children."""
    if state.selected is None:
        return state
    next_selection = first_child(tree, state.selected, sorting)
    if next_selection is None:
        return state
    return DisplayState(root=state.selected, selected=next_selection)


def move_selection(
    state: DisplayState,
    tree: Tree,
    sorting: SortMode,
    direction: CursorDirection,
) -> DisplayState:
    """Move the selection one row, clamping at both ends.

    A missing or vanished selection resets to the first row. A target row
    past the end leaves the selection as it was.
    """
    entries = sorted_entries(tree, state.root, sorting)
    next_pos = 0
    if state.selected is not None:
        position = next(
            (pos for pos, (idx, _entry) in enumerate(entries) if idx == state.selected),
            None,
        )
        if position is not None:
            if direction is CursorDirection.DOWN:
                next_pos = position + 1
            else:
                next_pos = max(0, position - 1)

    if next_pos >= len(entries):
        return state
    return DisplayState(root=state.root, selected=entries[next_pos][0])


def resolve_selection(state: DisplayState, tree: Tree, sorting: SortMode) -> DisplayState:
    """Keep a selection that is still a child of root, else pick the first row."""
    if state.selected is not None and tree.parent(state.selected) == state.root:
        return state
    return DisplayState(root=state.root, selected=first_child(tree, state.root, sorting))


def toggle_sort(state: DisplayState, tree: Tree, policy: SortPolicy) -> DisplayState:
    """Advance the sort policy and re-resolve the selection under the new order."""
    policy.toggle()
    return resolve_selection(state, tree, policy.mode)


__all__ = [
    "CursorDirection",
    "drill_down",
    "drill_up",
    "first_child",
    "move_selection",
    "resolve_selection",
    "toggle_sort",
]
