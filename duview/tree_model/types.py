"""Domain datatypes for scanned filesystem entries."""

from __future__ import annotations

from dataclasses import dataclass

NodeIndex = int


@dataclass
class EntryData:
    """Display-relevant facts about one filesystem object.

    ``size`` of a directory is the sum of its descendants as accumulated by
    the scanner. Only the scanner mutates instances.
    ``is_dir`` is set for directories even when they turn out empty or
    unreadable.
    """

    name: str
    size: int = 0
    metadata_io_error: bool = False
    is_dir: bool = False


__all__ = ["EntryData", "NodeIndex"]
