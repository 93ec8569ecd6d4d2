from __future__ import annotations

from collections.abc import Collection, Sequence

from termplot.raster.canvas import CharacterBuffer
from termplot.scales import ScreenPoint


BRAILLE_BASE = 0x2800
# Bit for the dot at (dx, dy) inside a 2x4 Braille cell, indexed [dy][dx].
BRAILLE_DOTS = (
    (0x01, 0x08),
    (0x02, 0x10),
    (0x04, 0x20),
    (0x40, 0x80),
)
BRAILLE_COLS = 2
BRAILLE_ROWS = 4

DIRECTION_GLYPHS = {
    "horizontal": "─",
    "vertical": "│",
    "falling": "╲",
    "rising": "╱",
}
ENDPOINT_GLYPH = "·"


def bresenham_line(start: ScreenPoint, end: ScreenPoint) -> list[ScreenPoint]:
    """Cells on the segment from ``start`` to ``end``, both endpoints included."""
    return [ScreenPoint(col=c, row=r) for c, r in _segment(start.col, start.row, end.col, end.row)]


def smooth_line(start: ScreenPoint, end: ScreenPoint) -> list[tuple[ScreenPoint, str]]:
    """Bresenham cells paired with a box-drawing glyph following the local direction."""
    cells = bresenham_line(start, end)
    if len(cells) == 1:
        return [(cells[0], ENDPOINT_GLYPH)]
    out: list[tuple[ScreenPoint, str]] = []
    for i, cell in enumerate(cells):
        prev = cells[i - 1] if i > 0 else cell
        nxt = cells[i + 1] if i + 1 < len(cells) else cell
        out.append((cell, _direction_glyph(nxt.col - prev.col, nxt.row - prev.row)))
    return out


def _direction_glyph(dx: int, dy: int) -> str:
    if dx == 0 and dy == 0:
        return ENDPOINT_GLYPH
    if dy == 0:
        return DIRECTION_GLYPHS["horizontal"]
    if dx == 0:
        return DIRECTION_GLYPHS["vertical"]
    if abs(dx) > 2 * abs(dy):
        return DIRECTION_GLYPHS["horizontal"]
    if abs(dy) > 2 * abs(dx):
        return DIRECTION_GLYPHS["vertical"]
    # Rows grow downward, so matching signs fall to the right.
    return DIRECTION_GLYPHS["falling"] if (dx > 0) == (dy > 0) else DIRECTION_GLYPHS["rising"]


def draw_polyline(
    dst: CharacterBuffer,
    points: Sequence[ScreenPoint],
    glyph: str,
    color: str | None = None,
    *,
    skip: Collection[ScreenPoint] = (),
    directional: bool = False,
) -> None:
    if len(points) < 2:
        return
    for a, b in zip(points[:-1], points[1:]):
        if directional:
            cells = smooth_line(a, b)
        else:
            cells = [(cell, glyph) for cell in bresenham_line(a, b)]
        for cell, char in cells:
            if cell in skip:
                continue
            dst.put(cell.col, cell.row, char, color)


class BrailleGrid:
    """Sub-cell dot raster: each character cell holds 2x4 Braille dots."""

    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, int(width))
        self.height = max(0, int(height))
        self._masks: dict[tuple[int, int], int] = {}

    @property
    def dot_width(self) -> int:
        return self.width * BRAILLE_COLS

    @property
    def dot_height(self) -> int:
        return self.height * BRAILLE_ROWS

    def set_dot(self, x: int, y: int) -> None:
        if x < 0 or y < 0 or x >= self.dot_width or y >= self.dot_height:
            return
        col, dx = divmod(x, BRAILLE_COLS)
        row, dy = divmod(y, BRAILLE_ROWS)
        key = (col, row)
        self._masks[key] = self._masks.get(key, 0) | BRAILLE_DOTS[dy][dx]

    def line(self, x0: int, y0: int, x1: int, y1: int) -> None:
        for x, y in _segment(x0, y0, x1, y1):
            self.set_dot(x, y)

    def to_dot(self, col: float, row: float) -> tuple[int, int]:
        """Map a fractional cell coordinate (cell centers at integers) to a dot."""
        x = int((col + 0.5) * BRAILLE_COLS)
        y = int((row + 0.5) * BRAILLE_ROWS)
        return (min(max(x, 0), max(0, self.dot_width - 1)), min(max(y, 0), max(0, self.dot_height - 1)))

    def cells(self) -> list[tuple[ScreenPoint, str]]:
        return [
            (ScreenPoint(col=col, row=row), chr(BRAILLE_BASE + mask))
            for (col, row), mask in sorted(self._masks.items(), key=lambda item: (item[0][1], item[0][0]))
        ]


def draw_subcell_polyline(
    dst: CharacterBuffer,
    points: Sequence[tuple[float, float]],
    color: str | None = None,
    *,
    skip: Collection[ScreenPoint] = (),
) -> None:
    """Rasterize a polyline of fractional cell coordinates as Braille dots.

    Dots are OR-ed into Braille glyphs already in ``dst``, so overlapping
    series keep each other's marks.
    """
    if len(points) < 2:
        return
    grid = BrailleGrid(dst.width, dst.height)
    dots = [grid.to_dot(col, row) for col, row in points]
    for (x0, y0), (x1, y1) in zip(dots[:-1], dots[1:]):
        grid.line(x0, y0, x1, y1)
    for cell, char in grid.cells():
        if cell in skip:
            continue
        dst.put(cell.col, cell.row, merge_braille(dst.get(cell.col, cell.row), char), color)


def merge_braille(existing: str | None, glyph: str) -> str:
    if not existing or not is_braille(existing):
        return glyph
    return chr(BRAILLE_BASE | (ord(existing) - BRAILLE_BASE) | (ord(glyph) - BRAILLE_BASE))


def is_braille(char: str) -> bool:
    return BRAILLE_BASE <= ord(char) <= BRAILLE_BASE + 0xFF


def _segment(x0: int, y0: int, x1: int, y1: int) -> list[tuple[int, int]]:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    out: list[tuple[int, int]] = []
    while True:
        out.append((x0, y0))
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
    return out
