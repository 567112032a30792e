"""Walk/display options and persisted JSON defaults.

Defaults for thread count, byte format, sort mode and color can be stored in
the user config file. All access is defensive: malformed or missing config
falls back to built-in defaults. Nothing is ever written back.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from platformdirs import user_config_dir

from .byte_format import ByteFormat
from .tree_model import SortMode

APP_NAME = "duview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


class Color(Enum):
    NONE = "none"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class WalkOptions:
    """Immutable session configuration shared by scanner and renderer.

    ``threads == 0`` means one worker per CPU.
    """

    threads: int = 0
    byte_format: ByteFormat = ByteFormat.METRIC
    color: Color = Color.TERMINAL
    sorting: SortMode = SortMode.ALPHABETICAL

    def worker_count(self) -> int:
        if self.threads > 0:
            return self.threads
        return os.cpu_count() or 1


@dataclass(frozen=True)
class DisplayOptions:
    """Subset of ``WalkOptions`` the renderer consumes."""

    byte_format: ByteFormat = ByteFormat.METRIC
    color: Color = Color.TERMINAL

    @classmethod
    def from_walk_options(cls, options: WalkOptions) -> DisplayOptions:
        return cls(byte_format=options.byte_format, color=options.color)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _load_enum(config: dict[str, object], key: str, enum_type: type[Enum], default: Enum) -> Enum:
    value = config.get(key)
    if not isinstance(value, str):
        return default
    try:
        return enum_type(value.strip().lower())
    except ValueError:
        return default


def load_threads(config: dict[str, object]) -> int:
    """Return a non-negative thread count; booleans and non-ints fall back to ``0``."""
    value = config.get("threads")
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(0, value)


def load_walk_options() -> WalkOptions:
    """Build ``WalkOptions`` from the config file, key by key."""
    config = load_config()
    defaults = WalkOptions()
    return WalkOptions(
        threads=load_threads(config),
        byte_format=_load_enum(config, "byte_format", ByteFormat, defaults.byte_format),
        color=_load_enum(config, "color", Color, defaults.color),
        sorting=_load_enum(config, "sorting", SortMode, defaults.sorting),
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "Color",
    "DisplayOptions",
    "WalkOptions",
    "load_config",
    "load_threads",
    "load_walk_options",
]
