from __future__ import annotations

import unicodedata

from termplot.raster.canvas import CharacterBuffer


def char_width(char: str) -> int:
    if unicodedata.combining(char):
        return 0
    return 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1


def text_width(text: str) -> int:
    """Terminal display width of ``text`` in cells."""
    return sum(char_width(c) for c in text)


def center_text(text: str, width: int) -> str:
    pad = max(0, (width - text_width(text)) // 2)
    return " " * pad + text


def draw_text(dst: CharacterBuffer, col: int, row: int, text: str, color: str | None = None) -> int:
    """Write ``text`` starting at ``col``; returns the column after the last cell.

    Wide characters occupy their cell and blank the one after it so the
    rendered row keeps its display width.
    """
    cursor = col
    for char in text:
        w = char_width(char)
        if w == 0:
            continue
        dst.put(cursor, row, char, color)
        if w == 2:
            dst.put(cursor + 1, row, "", color)
        cursor += w
    return cursor
