"""Key bindings for the browser and a small key-dispatch registry."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

DRILL_UP_KEYS = ("u",)
DRILL_DOWN_KEYS = ("o",)
SELECT_UP_KEYS = ("k",)
SELECT_DOWN_KEYS = ("j",)
TOGGLE_SORT_KEYS = ("s",)
QUIT_KEYS = ("q", "CTRL_C")


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback.

    A handler returning ``True`` asks the event loop to stop.
    """

    combos: tuple[str, ...]
    handler: Callable[[], bool | None]


class KeyComboRegistry:
    """Key-dispatch table; unknown keys dispatch to nothing."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], bool | None]] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def is_bound(self, key: str) -> bool:
        return key in self._handlers

    def dispatch(self, key: str) -> bool | None:
        """Invoke bound handler for ``key`` and return its result."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()


__all__ = [
    "DRILL_DOWN_KEYS",
    "DRILL_UP_KEYS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "QUIT_KEYS",
    "SELECT_DOWN_KEYS",
    "SELECT_UP_KEYS",
    "TOGGLE_SORT_KEYS",
]
