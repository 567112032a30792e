"""Multi-threaded filesystem walk that fills the disk-usage tree.

Worker threads only list directories and stat their entries. The calling
thread applies every listing to the ``Tree`` and is the only caller of the
progress callback, so the callback always observes a consistent tree.
"""

from __future__ import annotations

import logging
import os
import stat
import time
from collections.abc import Callable, Sequence
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path

from .config import WalkOptions
from .errors import ScanError
from .tree_model import EntryData, NodeIndex, Tree

logger = logging.getLogger(__name__)

REFRESH_INTERVAL_SECONDS = 0.25


@dataclass(frozen=True)
class ScannedChild:
    """One directory child observed by a worker."""

    name: str
    path: Path
    is_dir: bool
    size: int
    stat_error: bool = False


@dataclass(frozen=True)
class DirectoryListing:
    """Worker result for one directory."""

    node_idx: NodeIndex
    children: tuple[ScannedChild, ...]
    error: OSError | None = None


def _stat_child(path: Path, name: str) -> ScannedChild:
    try:
        st = os.lstat(path)
    except OSError as exc:
        logger.debug("cannot stat %s: %s", path, exc)
        return ScannedChild(name=name, path=path, is_dir=False, size=0, stat_error=True)
    is_dir = stat.S_ISDIR(st.st_mode)
    return ScannedChild(
        name=name,
        path=path,
        is_dir=is_dir,
        size=0 if is_dir else int(st.st_size),
    )


def list_directory(node_idx: NodeIndex, directory: Path) -> DirectoryListing:
    """List and stat the children of ``directory`` without following symlinks."""
    try:
        with os.scandir(directory) as entries:
            names = [entry.name for entry in entries]
    except OSError as exc:
        logger.debug("cannot list %s: %s", directory, exc)
        return DirectoryListing(node_idx=node_idx, children=(), error=exc)
    children = tuple(_stat_child(directory / name, name) for name in names)
    return DirectoryListing(node_idx=node_idx, children=children)


@dataclass
class Traversal:
    """Scan result: the tree, its top node, and error bookkeeping.

    The top node is a synthetic entry named ``""`` whose children are the
    input paths.
    """

    tree: Tree = field(default_factory=Tree)
    root_index: NodeIndex = 0
    io_errors: int = 0
    entries_traversed: int = 0
    is_scanning: bool = False

    def __post_init__(self) -> None:
        if len(self.tree) == 0:
            self.root_index = self.tree.add_node(EntryData(name=""))

    def add_entry(self, parent: NodeIndex, entry: EntryData) -> NodeIndex:
        """Insert ``entry`` under ``parent`` and roll its size up the ancestors."""
        idx = self.tree.add_node(entry)
        self.tree.add_edge(parent, idx)
        self.entries_traversed += 1
        if entry.metadata_io_error:
            self.io_errors += 1
        if entry.size:
            for ancestor in self.tree.ancestors(idx):
                self.tree.node(ancestor).size += entry.size
        return idx

    def mark_io_error(self, idx: NodeIndex) -> None:
        self.tree.node(idx).metadata_io_error = True
        self.io_errors += 1

    @classmethod
    def from_walk(
        cls,
        options: WalkOptions,
        input_paths: Sequence[Path],
        update: Callable[[Traversal], None],
    ) -> Traversal:
        """Walk ``input_paths`` and return the populated traversal.

        ``update`` is called from this thread at most once per refresh
        interval while the walk is running. Exceptions it raises abort the
        walk and propagate unchanged. Raises ``ScanError`` when an input path
        cannot be stat'ed.
        """
        traversal = cls()
        traversal.is_scanning = True
        workers = options.worker_count()
        started = time.monotonic()
        logger.info("scan started: %d path(s), %d worker(s)", len(input_paths), workers)

        pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="duview-walk")
        pending: set[Future[DirectoryListing]] = set()
        try:
            for input_path in input_paths:
                path = Path(input_path)
                try:
                    st = os.lstat(path)
                except OSError as exc:
                    raise ScanError(f"Cannot read {path}: {exc.strerror or exc}") from exc
                is_dir = stat.S_ISDIR(st.st_mode)
                idx = traversal.add_entry(
                    traversal.root_index,
                    EntryData(name=os.fspath(path), size=0 if is_dir else int(st.st_size), is_dir=is_dir),
                )
                if is_dir:
                    pending.add(pool.submit(list_directory, idx, path))

            last_update = time.monotonic()
            while pending:
                done, pending = wait(pending, timeout=REFRESH_INTERVAL_SECONDS, return_when=FIRST_COMPLETED)
                for future in done:
                    listing = future.result()
                    if listing.error is not None:
                        traversal.mark_io_error(listing.node_idx)
                        continue
                    for child in listing.children:
                        child_idx = traversal.add_entry(
                            listing.node_idx,
                            EntryData(
                                name=child.name,
                                size=child.size,
                                metadata_io_error=child.stat_error,
                                is_dir=child.is_dir,
                            ),
                        )
                        if child.is_dir:
                            pending.add(pool.submit(list_directory, child_idx, child.path))

                now = time.monotonic()
                if pending and now - last_update >= REFRESH_INTERVAL_SECONDS:
                    update(traversal)
                    last_update = now
        finally:
            pool.shutdown(wait=True, cancel_futures=True)
            traversal.is_scanning = False

        logger.info(
            "scan finished: %d entries, %d io error(s) in %.2fs",
            traversal.entries_traversed,
            traversal.io_errors,
            time.monotonic() - started,
        )
        return traversal


__all__ = [
    "DirectoryListing",
    "REFRESH_INTERVAL_SECONDS",
    "ScannedChild",
    "Traversal",
    "list_directory",
]
