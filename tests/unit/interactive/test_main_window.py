"""Tests for frame composition in ``MainWindow``."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from duview.byte_format import ByteFormat
from duview.config import Color, DisplayOptions, WalkOptions
from duview.interactive.render import REVERSE, MainWindow, root_label, scroll_start
from duview.interactive.state import DisplayState
from duview.traverse import Traversal
from duview.tree_model import EntryData, SortMode


def _traversal() -> tuple[Traversal, int, dict[str, int]]:
    traversal = Traversal()
    root = traversal.add_entry(traversal.root_index, EntryData("/data"))
    ids = {
        "docs": traversal.add_entry(root, EntryData("docs")),
        "big.bin": traversal.add_entry(root, EntryData("big.bin", 3000)),
        "bad": traversal.add_entry(root, EntryData("bad", metadata_io_error=True)),
    }
    ids["readme"] = traversal.add_entry(ids["docs"], EntryData("readme", 1000))
    return traversal, root, ids


def _plain() -> DisplayOptions:
    return DisplayOptions(byte_format=ByteFormat.BYTES, color=Color.NONE)


class MainWindowTests(unittest.TestCase):
    def test_frame_has_exact_height_and_width(self) -> None:
        traversal, root, ids = _traversal()
        window = MainWindow(traversal, _plain(), DisplayState(root, ids["docs"]), SortMode.ALPHABETICAL)

        rows = window.render(50, 8)

        self.assertEqual(len(rows), 8)
        self.assertTrue(all(len(row) == 50 for row in rows))

    def test_rows_follow_sort_and_mark_selection(self) -> None:
        traversal, root, ids = _traversal()
        window = MainWindow(traversal, _plain(), DisplayState(root, ids["docs"]), SortMode.SIZE_DESCENDING)

        rows = window.render(60, 6)

        body = rows[1:4]
        self.assertIn("big.bin", body[0])
        self.assertTrue(body[1].startswith(">"))
        self.assertIn("docs/", body[1])
        self.assertIn("bad", body[2])
        self.assertTrue(body[2].startswith(" !"))
        self.assertIn("75.0%", body[0])
        self.assertIn("3000 b", body[0])

    def test_header_and_footer_describe_view(self) -> None:
        traversal, root, ids = _traversal()
        window = MainWindow(traversal, _plain(), DisplayState(root, ids["docs"]), SortMode.ALPHABETICAL)

        rows = window.render(120, 6)

        self.assertIn("/data", rows[0])
        self.assertIn("(3 entries)", rows[0])
        self.assertIn("Sort: name", rows[-1])
        self.assertIn("Total: 4000 b", rows[-1])
        self.assertIn("IO errors: 1", rows[-1])

    def test_scanning_indicator(self) -> None:
        traversal, root, _ids = _traversal()
        traversal.is_scanning = True
        window = MainWindow(traversal, _plain(), DisplayState(traversal.root_index, None), SortMode.ALPHABETICAL)

        rows = window.render(120, 4)

        self.assertIn("scanning...", rows[0])
        self.assertIn("[all inputs]", rows[0])

    def test_selection_scrolled_into_view(self) -> None:
        traversal = Traversal()
        root = traversal.add_entry(traversal.root_index, EntryData("many"))
        last = None
        for n in range(20):
            last = traversal.add_entry(root, EntryData(f"f{n:02d}", 1))
        window = MainWindow(traversal, _plain(), DisplayState(root, last), SortMode.ALPHABETICAL)

        rows = window.render(40, 7)

        self.assertTrue(rows[-2].startswith(">"))
        self.assertIn("f19", rows[-2])

    def test_color_mode_highlights_selection(self) -> None:
        traversal, root, ids = _traversal()
        display = DisplayOptions(byte_format=ByteFormat.METRIC, color=Color.TERMINAL)
        window = MainWindow(traversal, display, DisplayState(root, ids["big.bin"]), SortMode.ALPHABETICAL)

        rows = window.render(60, 6)

        selected_row = next(row for row in rows if "big.bin" in row)
        self.assertTrue(selected_row.startswith(REVERSE))
        self.assertIn("3.00 kB", selected_row)

    def test_empty_and_unreadable_directories_are_marked(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp) / "b"
            (base / "empty-dir").mkdir(parents=True)
            (base / "full-dir").mkdir()
            (base / "full-dir" / "f").write_bytes(b"x")
            traversal = Traversal.from_walk(WalkOptions(threads=1), [base], lambda _t: None)
        root = traversal.tree.children(traversal.root_index)[0]
        unreadable = traversal.add_entry(root, EntryData("locked-dir", is_dir=True))
        traversal.mark_io_error(unreadable)
        window = MainWindow(traversal, _plain(), DisplayState(root, None), SortMode.ALPHABETICAL)

        rows = window.render(80, 6)

        self.assertTrue(any("empty-dir/" in row for row in rows))
        self.assertTrue(any("full-dir/" in row for row in rows))
        self.assertTrue(any("locked-dir/" in row for row in rows))

    def test_tiny_sizes(self) -> None:
        traversal, root, ids = _traversal()
        window = MainWindow(traversal, _plain(), DisplayState(root, ids["docs"]), SortMode.ALPHABETICAL)

        self.assertEqual(window.render(0, 5), [])
        self.assertEqual(len(window.render(20, 1)), 1)


class RenderHelperTests(unittest.TestCase):
    def test_scroll_start(self) -> None:
        self.assertEqual(scroll_start(None, 5), 0)
        self.assertEqual(scroll_start(3, 5), 0)
        self.assertEqual(scroll_start(9, 5), 5)

    def test_root_label_joins_names(self) -> None:
        traversal, root, ids = _traversal()

        self.assertEqual(root_label(traversal, ids["docs"]), "/data/docs")
        self.assertEqual(root_label(traversal, traversal.root_index), "[all inputs]")


if __name__ == "__main__":
    unittest.main()
