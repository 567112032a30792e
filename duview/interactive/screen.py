"""Full-frame output to the terminal."""

from __future__ import annotations

import os
import shutil
from typing import Protocol

from ..errors import RenderError


class Screen(Protocol):
    """Drawing surface used by the app; implementations raise ``RenderError``."""

    def size(self) -> tuple[int, int]: ...

    def draw(self, rows: list[str]) -> None: ...


class TerminalScreen:
    """Write composed rows to a terminal file descriptor, one frame per call."""

    def __init__(self, stdout_fd: int) -> None:
        self.stdout_fd = stdout_fd

    def size(self) -> tuple[int, int]:
        term = shutil.get_terminal_size((80, 24))
        return max(1, term.columns), max(1, term.lines)

    def draw(self, rows: list[str]) -> None:
        # Home the cursor, overwrite every row, and clear whatever is left below.
        frame = "\x1b[H" + "\r\n".join(row + "\x1b[K" for row in rows) + "\x1b[J"
        data = frame.encode("utf-8", errors="replace")
        try:
            while data:
                written = os.write(self.stdout_fd, data)
                data = data[written:]
        except OSError as exc:
            raise RenderError(f"Failed to draw frame: {exc}") from exc


__all__ = ["Screen", "TerminalScreen"]
