"""Terminal session entry point used by the CLI."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ..config import WalkOptions
from ..input import iter_keys
from .app import TerminalApp
from .screen import TerminalScreen
from .terminal import TerminalController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionResult:
    """Number of entries the scan could not stat."""

    error_count: int


def run(
    options: WalkOptions,
    input_paths: Sequence[Path],
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> SessionResult:
    """Scan ``input_paths`` and browse the result until the user quits.

    ``ScanError`` and ``RenderError`` propagate after the terminal has been
    restored.
    """
    stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    terminal = TerminalController(stdin_fd, stdout_fd)
    screen = TerminalScreen(stdout_fd)
    logger.info("session started for %s", ", ".join(str(path) for path in input_paths))
    with terminal.raw_mode():
        app = TerminalApp.initialize(screen, options, input_paths)
        result = app.process_events(screen, iter_keys(stdin_fd))
    return SessionResult(error_count=result.num_errors)


__all__ = ["SessionResult", "run"]
