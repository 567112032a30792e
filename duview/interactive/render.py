"""Frame composition for the disk-usage browser.

``MainWindow`` turns the traversal and view state into a list of screen rows
without touching the terminal. Rows are laid out as plain text first and
colored afterwards so width math never sees escape sequences.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from pygments.console import ansiformat, colorize

from ..byte_format import format_bytes
from ..config import Color, DisplayOptions
from ..traverse import Traversal
from ..tree_model import EntryData, NodeIndex, SortMode, sorted_entries
from .state import DisplayState
from .text import fit_to_width, printable

REVERSE = "\033[7m"
RESET = "\033[0m"
SIZE_COLUMN_WIDTH = 11
HELP_TEXT = "q quit  s sort  o open  u up  j/k move"


def root_label(traversal: Traversal, node_idx: NodeIndex) -> str:
    """Filesystem-style label for the directory being listed."""
    names = traversal.tree.path_of(node_idx)[1:]
    if not names:
        return "[all inputs]"
    return printable(os.path.join(*names))


def scroll_start(selected_pos: int | None, body_rows: int) -> int:
    """First visible row index keeping ``selected_pos`` on screen."""
    if selected_pos is None or body_rows <= 0:
        return 0
    return max(0, selected_pos - body_rows + 1)


@dataclass(frozen=True)
class MainWindow:
    traversal: Traversal
    display: DisplayOptions
    state: DisplayState
    sorting: SortMode

    @property
    def _colored(self) -> bool:
        return self.display.color is Color.TERMINAL

    def _header(self, width: int, entry_count: int) -> str:
        title = f" {root_label(self.traversal, self.state.root)}  ({entry_count} entries)"
        if self.traversal.is_scanning:
            title += f"  scanning... {self.traversal.entries_traversed} entries seen"
        row = fit_to_width(title, width)
        return ansiformat("*cyan*", row) if self._colored else row

    def _footer(self, width: int) -> str:
        root = self.traversal.tree.node(self.state.root)
        total = format_bytes(root.size, self.display.byte_format)
        text = (
            f" Sort: {self.sorting.label} | Total: {total}"
            f" | Entries: {self.traversal.entries_traversed}"
            f" | IO errors: {self.traversal.io_errors} | {HELP_TEXT}"
        )
        row = fit_to_width(text, width)
        return ansiformat("*gray*", row) if self._colored else row

    def _entry_row(self, idx: NodeIndex, entry: EntryData, root_size: int, width: int) -> str:
        is_selected = idx == self.state.selected
        is_dir = entry.is_dir or self.traversal.tree.has_children(idx)
        percent = (entry.size / root_size * 100.0) if root_size else 0.0
        size_text = format_bytes(entry.size, self.display.byte_format)
        name = printable(entry.name) + ("/" if is_dir else "")
        flag = "!" if entry.metadata_io_error else " "
        marker = ">" if is_selected else " "
        text = f"{marker}{flag}{size_text:>{SIZE_COLUMN_WIDTH}} | {percent:5.1f}% | {name}"
        row = fit_to_width(text, width)
        if not self._colored:
            return row
        if is_selected:
            return f"{REVERSE}{row}{RESET}"
        if entry.metadata_io_error:
            return colorize("red", row)
        if is_dir:
            return ansiformat("*blue*", row)
        return row

    def render(self, width: int, height: int) -> list[str]:
        """Compose exactly ``height`` rows of ``width`` columns."""
        if width <= 0 or height <= 0:
            return []
        entries = sorted_entries(self.traversal.tree, self.state.root, self.sorting)
        if height == 1:
            return [self._header(width, len(entries))]

        body_rows = max(0, height - 2)
        selected_pos = next(
            (pos for pos, (idx, _entry) in enumerate(entries) if idx == self.state.selected),
            None,
        )
        start = scroll_start(selected_pos, body_rows)
        root_size = self.traversal.tree.node(self.state.root).size

        rows = [self._header(width, len(entries))]
        for idx, entry in entries[start : start + body_rows]:
            rows.append(self._entry_row(idx, entry, root_size, width))
        while len(rows) < height - 1:
            rows.append(" " * width)
        rows.append(self._footer(width))
        return rows


__all__ = ["MainWindow", "root_label", "scroll_start"]
