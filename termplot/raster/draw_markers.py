from __future__ import annotations

from collections.abc import Iterable

from termplot.raster.canvas import CharacterBuffer
from termplot.scales import ScreenPoint


def draw_markers(dst: CharacterBuffer, points: Iterable[ScreenPoint], symbol: str, color: str | None = None) -> None:
    for point in points:
        dst.put(point.col, point.row, symbol, color)
