from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
import math

import numpy as np

from termplot.series import CategoricalCoordinate, Coordinate, NumericCoordinate


DEFAULT_BOUNDS = (-10.0, 10.0)
PADDING_RATIO = 0.1


@dataclass(frozen=True)
class Margins:
    left: int = 4
    right: int = 2
    top: int = 1
    bottom: int = 2


@dataclass(frozen=True)
class PlotArea:
    left: int
    top: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class ScreenPoint:
    col: int
    row: int


@dataclass(frozen=True)
class DataBounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @classmethod
    def from_points(cls, points: Iterable[NumericCoordinate | tuple[float, float]]) -> "DataBounds":
        xs: list[float] = []
        ys: list[float] = []
        for point in points:
            if isinstance(point, NumericCoordinate):
                xs.append(point.x)
                ys.append(point.y)
            else:
                xs.append(float(point[0]))
                ys.append(float(point[1]))
        return cls.from_values(np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64))

    @classmethod
    def from_values(cls, xs: np.ndarray, ys: np.ndarray) -> "DataBounds":
        min_x, max_x = padded_range(xs)
        min_y, max_y = padded_range(ys)
        return cls(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y)

    @property
    def x_range(self) -> float:
        return self.max_x - self.min_x

    @property
    def y_range(self) -> float:
        return self.max_y - self.min_y

    def with_limits(
        self,
        xlim: tuple[float, float] | None = None,
        ylim: tuple[float, float] | None = None,
    ) -> "DataBounds":
        min_x, max_x = (float(xlim[0]), float(xlim[1])) if xlim is not None else (self.min_x, self.max_x)
        min_y, max_y = (float(ylim[0]), float(ylim[1])) if ylim is not None else (self.min_y, self.max_y)
        return DataBounds(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y)

    def expanded_to_include(self, *, x: float | None = None, y: float | None = None) -> "DataBounds":
        min_x, max_x, min_y, max_y = self.min_x, self.max_x, self.min_y, self.max_y
        if x is not None:
            min_x, max_x = min(min_x, x), max(max_x, x)
        if y is not None:
            min_y, max_y = min(min_y, y), max(max_y, y)
        return DataBounds(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y)


def padded_range(values: np.ndarray, ratio: float = PADDING_RATIO) -> tuple[float, float]:
    """Return ``(lo, hi)`` with ``hi > lo`` for any input, padded by ``ratio``.

    Empty input falls back to the default window; a single distinct value gets
    a window of ``ratio`` times its magnitude (or a unit window around zero).
    """
    finite = values[np.isfinite(values)] if values.size else values
    if finite.size == 0:
        return DEFAULT_BOUNDS
    lo = float(np.min(finite))
    hi = float(np.max(finite))
    span = hi - lo
    if not math.isfinite(span):
        return (lo, hi)
    if span == 0.0:
        delta = abs(lo) * ratio if lo != 0.0 else 1.0
        return (lo - delta, hi + delta)
    pad = span * ratio
    padded = (lo - pad, hi + pad)
    if not (math.isfinite(padded[0]) and math.isfinite(padded[1])):
        return (lo, hi)
    return padded


class CategoricalAxis:
    """Evenly spaced X positions for an ordered set of category labels."""

    def __init__(self, labels: Sequence[str]) -> None:
        self.labels = tuple(labels)
        self._index = {label: i for i, label in enumerate(self.labels)}
        if len(self._index) != len(self.labels):
            raise ValueError("category labels must be unique")

    def __len__(self) -> int:
        return len(self.labels)

    def bounds_x(self) -> tuple[float, float]:
        return (0.0, float(max(1, len(self.labels))))

    def position(self, label: str, min_x: float, max_x: float) -> float:
        index = self._index[label]
        step = (max_x - min_x) / max(1, len(self.labels))
        return min_x + (index + 0.5) * step


class CoordinateTransformer:
    def __init__(
        self,
        bounds: DataBounds,
        width: int,
        height: int,
        margins: Margins | None = None,
        categories: CategoricalAxis | None = None,
    ) -> None:
        self.bounds = bounds
        self.width = int(width)
        self.height = int(height)
        self.margins = margins if margins is not None else Margins()
        self.categories = categories

    def plot_area(self) -> PlotArea:
        m = self.margins
        return PlotArea(
            left=m.left,
            top=m.top,
            width=max(0, self.width - m.left - m.right),
            height=max(0, self.height - m.top - m.bottom),
        )

    def resolve_x(self, point: Coordinate | tuple[float, float]) -> tuple[float, float]:
        if isinstance(point, NumericCoordinate):
            return (point.x, point.y)
        if isinstance(point, CategoricalCoordinate):
            if self.categories is None:
                raise KeyError(f"no categorical axis for label {point.label!r}")
            x = self.categories.position(point.label, self.bounds.min_x, self.bounds.max_x)
            return (x, point.y)
        return (float(point[0]), float(point[1]))

    def data_to_subcell(self, point: Coordinate | tuple[float, float]) -> tuple[float, float] | None:
        """Fractional ``(col, row)`` for ``point``, or ``None`` outside the window."""
        area = self.plot_area()
        if area.is_degenerate():
            return None
        x_range = self.bounds.x_range
        y_range = self.bounds.y_range
        if x_range == 0 or y_range == 0:
            return None
        x, y = self.resolve_x(point)
        norm_x = (x - self.bounds.min_x) / x_range
        norm_y = (y - self.bounds.min_y) / y_range
        if not (0.0 <= norm_x <= 1.0 and 0.0 <= norm_y <= 1.0):
            return None
        return (area.left + norm_x * area.width, area.top + (1.0 - norm_y) * area.height)

    def data_to_screen(self, point: Coordinate | tuple[float, float]) -> ScreenPoint | None:
        fractional = self.data_to_subcell(point)
        if fractional is None:
            return None
        col = int(round(fractional[0]))
        row = int(round(fractional[1]))
        if col >= self.width or row >= self.height:
            return None
        return ScreenPoint(col=col, row=row)

    def screen_to_data(self, point: ScreenPoint) -> NumericCoordinate | None:
        area = self.plot_area()
        if area.is_degenerate():
            return None
        norm_x = (point.col - area.left) / area.width
        norm_y = 1.0 - (point.row - area.top) / area.height
        return NumericCoordinate(
            x=self.bounds.min_x + norm_x * self.bounds.x_range,
            y=self.bounds.min_y + norm_y * self.bounds.y_range,
        )
