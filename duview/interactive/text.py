"""Terminal-cell text measurement for plain (unstyled) row text.

Rows are measured and clipped before color is applied, so these helpers do
not need to skip escape sequences.
"""

from __future__ import annotations

import unicodedata


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def printable(text: str) -> str:
    """Replace control and surrogate characters with ``?`` for safe drawing."""
    return "".join(
        "?" if unicodedata.category(ch) in {"Cc", "Cs"} else ch
        for ch in text
    )


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in text)


def clip_to_width(text: str, max_cols: int) -> str:
    """Trim ``text`` to at most ``max_cols`` display columns."""
    if max_cols <= 0:
        return ""
    out: list[str] = []
    col = 0
    for ch in text:
        width = char_display_width(ch)
        if col + width > max_cols:
            break
        out.append(ch)
        col += width
    return "".join(out)


def fit_to_width(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and pad the remainder with spaces."""
    clipped = clip_to_width(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


__all__ = ["char_display_width", "clip_to_width", "display_width", "fit_to_width", "printable"]
