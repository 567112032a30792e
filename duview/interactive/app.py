"""Interactive disk-usage browser: initialization and the key event loop."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from ..config import DisplayOptions, WalkOptions
from ..traverse import Traversal
from ..tree_model import SortMode, SortPolicy
from .keys import (
    DRILL_DOWN_KEYS,
    DRILL_UP_KEYS,
    QUIT_KEYS,
    SELECT_DOWN_KEYS,
    SELECT_UP_KEYS,
    TOGGLE_SORT_KEYS,
    KeyComboBinding,
    KeyComboRegistry,
)
from .navigation import CursorDirection, drill_down, drill_up, first_child, move_selection, toggle_sort
from .render import MainWindow
from .screen import Screen
from .state import DisplayState

logger = logging.getLogger(__name__)

WalkFn = Callable[[WalkOptions, Sequence[Path], Callable[[Traversal], None]], Traversal]


@dataclass(frozen=True)
class WalkResult:
    """Outcome reported to the caller once the session ends."""

    num_errors: int


def draw_window(
    screen: Screen,
    traversal: Traversal,
    display: DisplayOptions,
    state: DisplayState,
    sorting: SortMode,
) -> None:
    """Render one full frame sized to the current screen."""
    width, height = screen.size()
    screen.draw(MainWindow(traversal, display, state, sorting).render(width, height))


class TerminalApp:
    """State and key handling for browsing a finished traversal.

    Build instances with ``initialize``; drive them with ``process_events``.
    """

    def __init__(
        self,
        traversal: Traversal,
        display: DisplayOptions,
        state: DisplayState,
        sorting: SortPolicy,
    ) -> None:
        self.traversal = traversal
        self.display = display
        self.state = state
        self.sorting = sorting
        self._keys = KeyComboRegistry().register_bindings(
            KeyComboBinding(DRILL_UP_KEYS, self.exit_node),
            KeyComboBinding(DRILL_DOWN_KEYS, self.enter_node),
            KeyComboBinding(SELECT_UP_KEYS, lambda: self.change_vertical_index(CursorDirection.UP)),
            KeyComboBinding(SELECT_DOWN_KEYS, lambda: self.change_vertical_index(CursorDirection.DOWN)),
            KeyComboBinding(TOGGLE_SORT_KEYS, self.toggle_sorting),
            KeyComboBinding(QUIT_KEYS, lambda: True),
        )

    def draw(self, screen: Screen) -> None:
        draw_window(screen, self.traversal, self.display, self.state, self.sorting.mode)

    def exit_node(self) -> None:
        self.state = drill_up(self.state, self.traversal.tree, self.sorting.mode)

    def enter_node(self) -> None:
        self.state = drill_down(self.state, self.traversal.tree, self.sorting.mode)

    def change_vertical_index(self, direction: CursorDirection) -> None:
        self.state = move_selection(self.state, self.traversal.tree, self.sorting.mode, direction)

    def toggle_sorting(self) -> None:
        self.state = toggle_sort(self.state, self.traversal.tree, self.sorting)

    def handle_key(self, key: str) -> bool:
        """Apply the action bound to ``key``; return ``True`` to quit."""
        return self._keys.dispatch(key) is True

    def process_events(self, screen: Screen, keys: Iterable[str]) -> WalkResult:
        """Draw, then handle keys one at a time with a redraw after each.

        Returns on a quit key or when ``keys`` runs out. An interrupt during
        a redraw quits too. A ``RenderError`` aborts the loop and propagates.
        """
        try:
            self.draw(screen)
            for key in keys:
                if self.handle_key(key):
                    break
                self.draw(screen)
        except KeyboardInterrupt:
            logger.info("interrupted, quitting")
        logger.info("session finished with %d io error(s)", self.traversal.io_errors)
        return WalkResult(num_errors=self.traversal.io_errors)

    @classmethod
    def initialize(
        cls,
        screen: Screen,
        options: WalkOptions,
        input_paths: Sequence[Path],
        walk: WalkFn = Traversal.from_walk,
    ) -> TerminalApp:
        """Run the scan with provisional redraws and build the first view state.

        Progress frames show the scan's top node with nothing selected.
        """
        display = DisplayOptions.from_walk_options(options)

        def on_progress(traversal: Traversal) -> None:
            progress_state = DisplayState(root=traversal.root_index, selected=None)
            draw_window(screen, traversal, display, progress_state, options.sorting)

        traversal = walk(options, input_paths, on_progress)

        sorting = SortPolicy(options.sorting)
        root = traversal.root_index
        state = DisplayState(root=root, selected=first_child(traversal.tree, root, sorting.mode))
        logger.info("browsing %d entries", traversal.entries_traversed)
        return cls(traversal, display, state, sorting)


__all__ = ["TerminalApp", "WalkResult", "draw_window"]
