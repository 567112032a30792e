"""Tests for raw key decoding and the key-dispatch registry."""

from __future__ import annotations

import os
import unittest

from duview import input as key_input
from duview.interactive.keys import QUIT_KEYS, KeyComboBinding, KeyComboRegistry


class _Pipe:
    def __init__(self, data: bytes) -> None:
        self.read_fd, write_fd = os.pipe()
        os.write(write_fd, data)
        os.close(write_fd)

    def close(self) -> None:
        os.close(self.read_fd)


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        key_input._PENDING_BYTES.clear()

    def _keys(self, data: bytes) -> list[str]:
        pipe = _Pipe(data)
        try:
            return list(key_input.iter_keys(pipe.read_fd))
        finally:
            pipe.close()

    def test_plain_and_control_keys(self) -> None:
        self.assertEqual(self._keys(b"jkq\x03\r"), ["j", "k", "q", "CTRL_C", "ENTER"])

    def test_arrow_sequences(self) -> None:
        self.assertEqual(self._keys(b"\x1b[A\x1b[B"), ["UP", "DOWN"])

    def test_unknown_csi_sequence_is_dropped(self) -> None:
        self.assertEqual(self._keys(b"\x1b[1;5Pj"), ["j"])

    def test_multibyte_utf8_key(self) -> None:
        self.assertEqual(self._keys("é".encode("utf-8") + b"u"), ["é", "u"])

    def test_undecodable_byte_is_dropped(self) -> None:
        self.assertEqual(self._keys(b"\xffo"), ["o"])

    def test_truncated_utf8_keeps_following_key(self) -> None:
        self.assertEqual(self._keys(b"\xc3q"), ["q"])
        self.assertEqual(self._keys(b"\xe2\x82j\x1b[B"), ["j", "DOWN"])

    def test_timeout_returns_empty_token(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            self.assertEqual(key_input.read_key(read_fd, timeout_ms=0), "")
        finally:
            os.close(read_fd)
            os.close(write_fd)


class KeyComboRegistryTests(unittest.TestCase):
    def test_dispatch_returns_handler_result(self) -> None:
        calls: list[str] = []
        registry = KeyComboRegistry().register_bindings(
            KeyComboBinding(("j",), lambda: calls.append("down")),
            KeyComboBinding(QUIT_KEYS, lambda: True),
        )

        self.assertIsNone(registry.dispatch("j"))
        self.assertTrue(registry.dispatch("q"))
        self.assertTrue(registry.dispatch("CTRL_C"))
        self.assertIsNone(registry.dispatch("z"))
        self.assertEqual(calls, ["down"])
        self.assertFalse(registry.is_bound("z"))

    def test_later_binding_overrides_earlier(self) -> None:
        registry = KeyComboRegistry()
        registry.register_binding(KeyComboBinding(("s",), lambda: False))
        registry.register_binding(KeyComboBinding(("s",), lambda: True))

        self.assertTrue(registry.dispatch("s"))


if __name__ == "__main__":
    unittest.main()
