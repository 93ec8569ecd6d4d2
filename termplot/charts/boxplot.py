from __future__ import annotations

from typing import Any, Literal

import numpy as np

from termplot.adapters.normalize import normalize_dataset
from termplot.charts.base import ChartFrame, build_frame, finish
from termplot.config import RenderConfig
from termplot.raster.canvas import CharacterBuffer
from termplot.raster.layers import RenderPriority
from termplot.scales import CategoricalAxis, DataBounds, padded_range
from termplot.series import CategoricalCoordinate
from termplot.stats.boxplot import BoxStatistics, OutlierMethod, compute_box_statistics
from termplot.ticks import Tick


OUTLIER_CHAR = "●"
MEAN_CHAR = "+"
MAX_HALF_WIDTH = 3

Orientation = Literal["vertical", "horizontal"]


def render_boxplot(
    data: Any,
    config: RenderConfig | None = None,
    *,
    orientation: Orientation = "vertical",
    method: OutlierMethod | str = OutlierMethod.IQR,
    multiplier: float | None = None,
    show_outliers: bool = True,
    show_mean: bool = False,
    notched: bool = False,
) -> str:
    """One box per column, placed on a category axis named by the columns."""
    config = config if config is not None else RenderConfig()
    if orientation not in ("vertical", "horizontal"):
        raise ValueError(f"unknown orientation: {orientation!r}")
    dataset = normalize_dataset(data)
    boxes = [
        (col.name, compute_box_statistics(col.values, method=method, multiplier=multiplier, label=col.name))
        for col in dataset.columns
    ]

    extremes: list[float] = []
    for _, stats in boxes:
        extremes.extend((stats.lower_whisker, stats.upper_whisker))
        if show_outliers:
            extremes.extend(stats.outliers)
    lo, hi = padded_range(np.asarray(extremes, dtype=np.float64))
    labels = [name for name, _ in boxes]

    if orientation == "vertical":
        axis = CategoricalAxis(labels)
        c_lo, c_hi = axis.bounds_x()
        bounds = DataBounds(min_x=c_lo, max_x=c_hi, min_y=lo, max_y=hi).with_limits(None, config.ylim)
        x_ticks = [
            Tick(value=float(i), label=name, position=axis.position(name, c_lo, c_hi)) for i, name in enumerate(labels)
        ]
        frame = build_frame(config, bounds, x_ticks=x_ticks, categories=axis)
        half = _half_width(frame.area.width, len(boxes))
        for name, stats in boxes:
            _draw_vertical_box(frame, name, stats, half, show_outliers, show_mean, notched)
        return finish(frame)

    axis = CategoricalAxis(list(reversed(labels)))
    c_lo, c_hi = axis.bounds_x()
    bounds = DataBounds(min_x=lo, max_x=hi, min_y=c_lo, max_y=c_hi).with_limits(config.xlim, None)
    y_ticks = [Tick(value=axis.position(name, c_lo, c_hi), label=name) for name in labels]
    frame = build_frame(config, bounds, y_ticks=y_ticks)
    half = 1 if frame.area.height // max(1, len(boxes)) >= 4 else 0
    for name, stats in boxes:
        _draw_horizontal_box(frame, axis.position(name, c_lo, c_hi), stats, half, show_outliers, show_mean, notched)
    return finish(frame)


def _half_width(plot_width: int, count: int) -> int:
    slot = plot_width // max(1, count)
    return max(1, min(MAX_HALF_WIDTH, (slot - 2) // 2))


def _draw_vertical_box(
    frame: ChartFrame,
    name: str,
    stats: BoxStatistics,
    half: int,
    show_outliers: bool,
    show_mean: bool,
    notched: bool,
) -> None:
    transformer = frame.transformer
    color = frame.config.color
    lines = frame.canvas.layer(RenderPriority.LINES)

    def row_of(value: float) -> int | None:
        point = transformer.data_to_screen(CategoricalCoordinate(label=name, y=value))
        if point is None or point.row >= frame.axis_row:
            return None
        return point.row

    anchor = transformer.data_to_screen(CategoricalCoordinate(label=name, y=stats.median))
    if anchor is None:
        return
    center = anchor.col
    left, right = center - half, center + half
    r_low, r_q1, r_med, r_q3, r_high = (
        row_of(v) for v in (stats.lower_whisker, stats.q1, stats.median, stats.q3, stats.upper_whisker)
    )

    if r_high is not None and r_q3 is not None and r_high < r_q3:
        lines.draw_vline(center, r_high, r_q3 - 1, "│", color)
        lines.draw_hline(center - 1, center + 1, r_high, "─", color)
    if r_low is not None and r_q1 is not None and r_low > r_q1:
        lines.draw_vline(center, r_q1 + 1, r_low, "│", color)
        lines.draw_hline(center - 1, center + 1, r_low, "─", color)

    if r_q1 is not None and r_q3 is not None:
        if r_q3 < r_q1:
            lines.draw_vline(left, r_q3, r_q1, "│", color)
            lines.draw_vline(right, r_q3, r_q1, "│", color)
            lines.draw_hline(left, right, r_q3, "─", color)
            lines.draw_hline(left, right, r_q1, "─", color)
            _corners(lines, left, right, r_q3, r_q1, color)
            if notched:
                for value in (stats.notch_low, stats.notch_high):
                    r = row_of(value)
                    if r is not None and r_q3 < r < r_q1:
                        lines.put(left, r, ">", color)
                        lines.put(right, r, "<", color)
        else:
            lines.draw_hline(left, right, r_q1, "─", color)
    if r_med is not None:
        lines.draw_hline(left + 1, right - 1, r_med, "━", color)
        lines.put(left, r_med, "┝", color)
        lines.put(right, r_med, "┥", color)

    points = frame.canvas.layer(RenderPriority.POINTS)
    symbol = frame.config.symbol if frame.config.symbol is not None else OUTLIER_CHAR
    if show_outliers:
        for value in stats.outliers:
            r = row_of(value)
            if r is not None:
                points.put(center, r, symbol, color)
    if show_mean:
        r = row_of(stats.mean)
        if r is not None:
            points.put(center, r, MEAN_CHAR, color)


def _draw_horizontal_box(
    frame: ChartFrame,
    position: float,
    stats: BoxStatistics,
    half: int,
    show_outliers: bool,
    show_mean: bool,
    notched: bool,
) -> None:
    transformer = frame.transformer
    color = frame.config.color
    lines = frame.canvas.layer(RenderPriority.LINES)

    def col_of(value: float) -> int | None:
        point = transformer.data_to_screen((value, position))
        return None if point is None else point.col

    anchor = transformer.data_to_screen((stats.median, position))
    if anchor is None:
        return
    center = anchor.row
    top, bottom = center - half, center + half
    c_low, c_q1, c_med, c_q3, c_high = (
        col_of(v) for v in (stats.lower_whisker, stats.q1, stats.median, stats.q3, stats.upper_whisker)
    )

    if c_low is not None and c_q1 is not None and c_low < c_q1:
        lines.draw_hline(c_low, c_q1 - 1, center, "─", color)
        lines.draw_vline(c_low, top, bottom, "│", color)
    if c_high is not None and c_q3 is not None and c_high > c_q3:
        lines.draw_hline(c_q3 + 1, c_high, center, "─", color)
        lines.draw_vline(c_high, top, bottom, "│", color)

    if c_q1 is not None and c_q3 is not None:
        if half > 0 and c_q3 > c_q1:
            lines.draw_hline(c_q1, c_q3, top, "─", color)
            lines.draw_hline(c_q1, c_q3, bottom, "─", color)
            lines.draw_vline(c_q1, top, bottom, "│", color)
            lines.draw_vline(c_q3, top, bottom, "│", color)
            _corners(lines, c_q1, c_q3, top, bottom, color)
        else:
            lines.draw_hline(c_q1, c_q3, center, "═", color)
            lines.put(c_q1, center, "[", color)
            lines.put(c_q3, center, "]", color)
        if notched:
            for value in (stats.notch_low, stats.notch_high):
                c = col_of(value)
                if c is not None and c_q1 < c < c_q3:
                    lines.put(c, center, "¦", color)
    if c_med is not None:
        lines.draw_vline(c_med, top, bottom, "┃", color)

    points = frame.canvas.layer(RenderPriority.POINTS)
    symbol = frame.config.symbol if frame.config.symbol is not None else OUTLIER_CHAR
    if show_outliers:
        for value in stats.outliers:
            c = col_of(value)
            if c is not None:
                points.put(c, center, symbol, color)
    if show_mean:
        c = col_of(stats.mean)
        if c is not None:
            points.put(c, center, MEAN_CHAR, color)


def _corners(dst: CharacterBuffer, left: int, right: int, top: int, bottom: int, color: str | None) -> None:
    dst.put(left, top, "┌", color)
    dst.put(right, top, "┐", color)
    dst.put(left, bottom, "└", color)
    dst.put(right, bottom, "┘", color)
