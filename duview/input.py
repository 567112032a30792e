"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Escape sequences are consumed and reported as navigation tokens; bytes that
do not decode as text are dropped.
"""

from __future__ import annotations

import os
import select
from collections.abc import Iterator

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS = {
    b"\x03": "CTRL_C",
    b"\t": "TAB",
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
}

_ARROW_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, lead: bytes) -> bytes:
    """Collect continuation bytes for a multi-byte UTF-8 character.

    A byte outside ``0x80-0xBF`` ends the character early and is queued as
    the next key.
    """
    first = lead[0]
    if 0xF0 <= first < 0xF8:
        needed = 3
    elif 0xE0 <= first < 0xF0:
        needed = 2
    elif 0xC0 <= first < 0xE0:
        needed = 1
    else:
        needed = 0
    data = lead
    for _ in range(needed):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        if not 0x80 <= nxt[0] <= 0xBF:
            _PENDING_BYTES.append(nxt)
            break
        data += nxt
    return data


def read_key(fd: int, timeout_ms: int | None = None) -> str | None:
    """Read one key token.

    Returns ``""`` on timeout or EOF and ``None`` for input that cannot be
    decoded.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]

    if ch != b"\x1b":
        try:
            return _read_utf8_tail(fd, ch).decode("utf-8")
        except UnicodeDecodeError:
            return None

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq != b"[":
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq in _ARROW_KEYS:
        return _ARROW_KEYS[seq]
    # Swallow the rest of an unknown CSI sequence up to its final byte.
    while not (0x40 <= seq[0] <= 0x7E):
        seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            break
    return None


def iter_keys(fd: int) -> Iterator[str]:
    """Yield decoded keys until EOF.

    ``KeyboardInterrupt`` while waiting is reported as ``CTRL_C``.
    """
    while True:
        try:
            key = read_key(fd)
        except KeyboardInterrupt:
            yield "CTRL_C"
            continue
        if key is None:
            continue
        if key == "":
            return
        yield key


__all__ = ["ESC_SEQUENCE_TIMEOUT_MS", "iter_keys", "read_key"]
