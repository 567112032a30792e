"""Interactive browser: view state, navigation, rendering and the event loop."""

from __future__ import annotations

from .app import TerminalApp, WalkResult
from .navigation import CursorDirection
from .session import SessionResult, run
from .state import DisplayState

__all__ = [
    "CursorDirection",
    "DisplayState",
    "SessionResult",
    "TerminalApp",
    "WalkResult",
    "run",
]
