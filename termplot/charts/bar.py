from __future__ import annotations

from typing import Any, Literal

import numpy as np

from termplot.adapters.normalize import (
    finite_values,
    is_categorical_input,
    normalize_categorical,
    normalize_dataset,
)
from termplot.charts.base import ChartFrame, build_frame, finish, resolve_bounds, xy_series
from termplot.config import RenderConfig
from termplot.errors import PlotDataError
from termplot.raster.layers import RenderPriority
from termplot.scales import CategoricalAxis, DataBounds, padded_range
from termplot.series import CategoricalCoordinate
from termplot.ticks import Tick


BAR_CHAR = "█"
MAX_BAR_WIDTH = 5

Orientation = Literal["vertical", "horizontal"]


def render_bar(
    data: Any,
    config: RenderConfig | None = None,
    *,
    orientation: Orientation = "vertical",
    bar_width: int | None = None,
) -> str:
    """Render bars from a zero baseline.

    ``data`` is either categorical (``(label, value)`` pairs, a mapping of
    label to value, a pandas Series) or numeric columns: a single column of
    heights, or X and height columns.
    """
    config = config if config is not None else RenderConfig()
    if orientation not in ("vertical", "horizontal"):
        raise ValueError(f"unknown orientation: {orientation!r}")
    if bar_width is not None and bar_width < 1:
        raise ValueError("bar_width must be >= 1")

    if is_categorical_input(data):
        categorical = normalize_categorical(data)
        finite = np.isfinite(categorical.values)
        finite_values(categorical.values, label=categorical.name)
        labels = [label for label, ok in zip(categorical.labels, finite.tolist()) if ok]
        values = categorical.values[finite]
    else:
        dataset = normalize_dataset(data)
        if dataset.num_columns > 2:
            raise PlotDataError(f"bar chart takes at most 2 columns (x and height), got {dataset.num_columns}")
        _, x, values = xy_series(dataset)[0]
        if orientation == "vertical":
            return _render_numeric(x, values, config, bar_width)
        labels = [format(float(v), "g") for v in x.tolist()]
        if len(set(labels)) != len(labels):
            raise PlotDataError("horizontal bars need distinct x values")

    if orientation == "horizontal":
        return _render_horizontal(labels, values, config)
    return _render_categorical(labels, values, config, bar_width)


def _baseline(lo: float, hi: float) -> float:
    return min(max(0.0, lo), hi)


def _render_numeric(x: np.ndarray, heights: np.ndarray, config: RenderConfig, bar_width: int | None) -> str:
    bounds = resolve_bounds(DataBounds.from_values(x, heights).expanded_to_include(y=0.0), config)
    frame = build_frame(config, bounds)
    base = _baseline(bounds.min_y, bounds.max_y)

    columns = []
    for xv, yv in zip(x.tolist(), heights.tolist()):
        anchor = frame.transformer.data_to_screen((xv, base))
        if anchor is not None:
            columns.append((anchor.col, yv))
    width = bar_width if bar_width is not None else _auto_width([c for c, _ in columns], frame.area.width)
    for col, yv in columns:
        _draw_vertical_bar(frame, col, yv, base, width, config.color)
    return finish(frame)


def _render_categorical(labels: list[str], values: np.ndarray, config: RenderConfig, bar_width: int | None) -> str:
    axis = CategoricalAxis(labels)
    x_lo, x_hi = axis.bounds_x()
    y_lo, y_hi = padded_range(values)
    bounds = resolve_bounds(DataBounds(x_lo, x_hi, y_lo, y_hi).expanded_to_include(y=0.0), config)
    x_ticks = [
        Tick(value=float(i), label=label, position=axis.position(label, x_lo, x_hi)) for i, label in enumerate(labels)
    ]
    frame = build_frame(config, bounds, x_ticks=x_ticks, categories=axis)
    base = _baseline(bounds.min_y, bounds.max_y)

    slot = frame.area.width // max(1, len(labels))
    width = bar_width if bar_width is not None else max(1, min(MAX_BAR_WIDTH, slot - 1))
    for label, yv in zip(labels, values.tolist()):
        anchor = frame.transformer.data_to_screen(CategoricalCoordinate(label=label, y=base))
        if anchor is not None:
            _draw_vertical_bar(frame, anchor.col, yv, base, width, config.color)
    return finish(frame)


def _render_horizontal(labels: list[str], values: np.ndarray, config: RenderConfig) -> str:
    # First label on top: positions run bottom-up over the reversed labels.
    axis = CategoricalAxis(list(reversed(labels)))
    y_lo, y_hi = axis.bounds_x()
    x_lo, x_hi = padded_range(values)
    bounds = DataBounds(x_lo, x_hi, y_lo, y_hi).expanded_to_include(x=0.0).with_limits(config.xlim, None)
    y_ticks = [Tick(value=axis.position(label, y_lo, y_hi), label=label) for label in labels]
    frame = build_frame(config, bounds, y_ticks=y_ticks)
    base = min(max(0.0, bounds.min_x), bounds.max_x)

    bars = frame.canvas.layer(RenderPriority.LINES)
    for label, xv in zip(labels, values.tolist()):
        y = axis.position(label, y_lo, y_hi)
        start = frame.transformer.data_to_screen((base, y))
        end = frame.transformer.data_to_screen((min(max(xv, bounds.min_x), bounds.max_x), y))
        if start is None or end is None or start.col == end.col:
            continue
        if end.col > start.col:
            bars.draw_hline(start.col, end.col, start.row, BAR_CHAR, config.color)
        else:
            bars.draw_hline(end.col, start.col - 1, start.row, BAR_CHAR, config.color)
    return finish(frame)


def _auto_width(columns: list[int], plot_width: int) -> int:
    unique = sorted(set(columns))
    if len(unique) < 2:
        slot = max(1, plot_width // 4)
    else:
        slot = int(np.min(np.diff(unique)))
    return max(1, min(MAX_BAR_WIDTH, slot - 1))


def _draw_vertical_bar(frame: ChartFrame, col: int, value: float, base: float, width: int, color: str | None) -> None:
    bounds = frame.bounds
    area = frame.area
    clipped = min(max(value, bounds.min_y), bounds.max_y)
    top = frame.transformer.data_to_screen((bounds.min_x, clipped))
    bottom = frame.transformer.data_to_screen((bounds.min_x, base))
    if top is None or bottom is None or top.row == bottom.row:
        return
    # Bars sit on the baseline row when growing upward; the axis row stays clear.
    if top.row < bottom.row:
        row0, row1 = top.row, min(bottom.row, frame.axis_row - 1)
    else:
        row0, row1 = bottom.row + 1, min(top.row, frame.axis_row - 1)
    if row1 < row0:
        return
    left = max(area.left, col - width // 2)
    right = min(area.right, left + width - 1)
    frame.canvas.layer(RenderPriority.LINES).fill_rect(left, row0, right, row1, BAR_CHAR, color)
