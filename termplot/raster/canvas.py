from __future__ import annotations

from collections.abc import Callable

import numpy as np


BLANK = " "

Colorizer = Callable[[str, str], str]


class CharacterBuffer:
    """Fixed-size grid of single characters with an optional color per cell."""

    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, int(width))
        self.height = max(0, int(height))
        self.cells = np.full((self.height, self.width), BLANK, dtype="<U1")
        self.colors = np.full((self.height, self.width), None, dtype=object)

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def put(self, col: int, row: int, char: str, color: str | None = None) -> None:
        if not self.in_bounds(col, row):
            return
        self.cells[row, col] = char
        self.colors[row, col] = color

    def get(self, col: int, row: int) -> str | None:
        if not self.in_bounds(col, row):
            return None
        return str(self.cells[row, col])

    def color_at(self, col: int, row: int) -> str | None:
        if not self.in_bounds(col, row):
            return None
        return self.colors[row, col]

    def draw_hline(self, col0: int, col1: int, row: int, char: str, color: str | None = None) -> None:
        if row < 0 or row >= self.height:
            return
        ca = max(0, min(col0, col1))
        cb = min(self.width - 1, max(col0, col1))
        if ca > cb:
            return
        self.cells[row, ca : cb + 1] = char
        self.colors[row, ca : cb + 1] = color

    def draw_vline(self, col: int, row0: int, row1: int, char: str, color: str | None = None) -> None:
        if col < 0 or col >= self.width:
            return
        ra = max(0, min(row0, row1))
        rb = min(self.height - 1, max(row0, row1))
        if ra > rb:
            return
        self.cells[ra : rb + 1, col] = char
        self.colors[ra : rb + 1, col] = color

    def fill_rect(self, col0: int, row0: int, col1: int, row1: int, char: str, color: str | None = None) -> None:
        ca = max(0, min(col0, col1))
        cb = min(self.width - 1, max(col0, col1))
        ra = max(0, min(row0, row1))
        rb = min(self.height - 1, max(row0, row1))
        if ca > cb or ra > rb:
            return
        self.cells[ra : rb + 1, ca : cb + 1] = char
        self.colors[ra : rb + 1, ca : cb + 1] = color

    def blit(self, src: "CharacterBuffer") -> None:
        """Copy every non-blank cell of ``src`` over this buffer, char and color together."""
        h = min(self.height, src.height)
        w = min(self.width, src.width)
        if h == 0 or w == 0:
            return
        patch = src.cells[:h, :w]
        mask = patch != BLANK
        self.cells[:h, :w][mask] = patch[mask]
        self.colors[:h, :w][mask] = src.colors[:h, :w][mask]

    def rows(self, colorize: Colorizer | None = None) -> list[str]:
        out: list[str] = []
        for r in range(self.height):
            chars = self.cells[r].tolist()
            end = len(chars)
            while end > 0 and chars[end - 1] == BLANK:
                end -= 1
            if colorize is None:
                out.append("".join(chars[:end]))
                continue
            colors = self.colors[r].tolist()
            out.append("".join(_colored_runs(chars[:end], colors[:end], colorize)))
        return out

    def to_string(self, colorize: Colorizer | None = None) -> str:
        return "".join(f"{row}\n" for row in self.rows(colorize))


def _colored_runs(chars: list[str], colors: list[str | None], colorize: Colorizer) -> list[str]:
    parts: list[str] = []
    start = 0
    for i in range(1, len(chars) + 1):
        if i == len(chars) or colors[i] != colors[start]:
            text = "".join(chars[start:i])
            color = colors[start]
            parts.append(colorize(text, color) if color is not None and text.strip() else text)
            start = i
    return parts
