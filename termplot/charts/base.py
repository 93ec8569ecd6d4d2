from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging

import numpy as np

from termplot.adapters.normalize import finite_pairs
from termplot.compile.text import LegendEntry, compile_text
from termplot.config import SERIES_SYMBOLS, LineStyle, RenderConfig
from termplot.errors import PlotDataError
from termplot.layout import Layout, LayoutEngine
from termplot.raster.draw_lines import draw_polyline, draw_subcell_polyline
from termplot.raster.draw_markers import draw_markers
from termplot.raster.draw_text import draw_text, text_width
from termplot.raster.layers import LayeredCanvas, RenderPriority
from termplot.scales import CategoricalAxis, CoordinateTransformer, DataBounds, PlotArea, ScreenPoint
from termplot.series import Dataset
from termplot.ticks import Tick


LOGGER = logging.getLogger(__name__)

AXIS_VERTICAL = "│"
AXIS_HORIZONTAL = "─"
AXIS_CORNER = "└"
TICK_X = "┬"
TICK_Y = "┤"


@dataclass
class ChartFrame:
    config: RenderConfig
    bounds: DataBounds
    layout: Layout
    transformer: CoordinateTransformer
    canvas: LayeredCanvas

    @property
    def area(self) -> PlotArea:
        return self.layout.plot_area

    @property
    def axis_row(self) -> int:
        return self.area.bottom

    @property
    def axis_col(self) -> int:
        return self.area.left - 1


def build_frame(
    config: RenderConfig,
    bounds: DataBounds,
    *,
    x_ticks: Sequence[Tick] | None = None,
    y_ticks: Sequence[Tick] | None = None,
    categories: CategoricalAxis | None = None,
) -> ChartFrame:
    engine = LayoutEngine(config.width, config.height, show_labels=config.show_labels)
    layout = engine.calculate_layout(bounds, x_ticks=x_ticks, y_ticks=y_ticks)
    transformer = CoordinateTransformer(bounds, config.width, config.height, layout.margins, categories)
    frame = ChartFrame(
        config=config,
        bounds=bounds,
        layout=layout,
        transformer=transformer,
        canvas=LayeredCanvas(config.width, config.height),
    )
    draw_axes(frame)
    return frame


def draw_axes(frame: ChartFrame) -> None:
    area = frame.area
    if area.is_degenerate():
        return
    axes = frame.canvas.layer(RenderPriority.AXES)
    col = frame.axis_col
    row = frame.axis_row
    axes.draw_vline(col, area.top, row - 1, AXIS_VERTICAL)
    axes.draw_hline(area.left, area.right, row, AXIS_HORIZONTAL)
    axes.put(col, row, AXIS_CORNER)
    for tick_col, _ in frame.layout.x_ticks:
        axes.put(tick_col, row, TICK_X)
    for tick_row, _ in frame.layout.y_ticks:
        if tick_row < row:
            axes.put(col, tick_row, TICK_Y)

    if frame.config.show_labels:
        _draw_tick_labels(frame)


def _draw_tick_labels(frame: ChartFrame) -> None:
    labels = frame.canvas.layer(RenderPriority.LABELS)
    label_end = frame.axis_col - 1
    for tick_row, tick in frame.layout.y_ticks:
        start = label_end - text_width(tick.label)
        if start >= 0:
            draw_text(labels, start, tick_row, tick.label)

    label_row = frame.axis_row + 1
    if label_row >= frame.config.height:
        return
    # Labels that would collide with the previous one are dropped.
    next_free = 0
    for tick_col, tick in frame.layout.x_ticks:
        w = text_width(tick.label)
        start = min(max(0, tick_col - w // 2), frame.config.width - w)
        if start < next_free or start < 0:
            continue
        draw_text(labels, start, label_row, tick.label)
        next_free = start + w + 1


def resolve_bounds(bounds: DataBounds, config: RenderConfig) -> DataBounds:
    return bounds.with_limits(config.xlim, config.ylim)


def xy_series(dataset: Dataset) -> list[tuple[str, np.ndarray, np.ndarray]]:
    """Split a dataset into ``(name, x, y)`` series of finite points.

    A single column is plotted against its index; otherwise the first column
    is X and every further column is a Y series.
    """
    dataset.require_equal_lengths()
    if dataset.is_empty():
        raise PlotDataError("empty series")
    if dataset.num_columns == 1:
        only = dataset.column(0)
        x = np.arange(len(only), dtype=np.float64)
        return [(only.name, *finite_pairs(x, only.values, label=only.name))]
    x_col = dataset.column(0)
    return [(col.name, *finite_pairs(x_col.values, col.values, label=col.name)) for col in dataset.columns[1:]]


def series_symbol(config: RenderConfig, style: LineStyle, index: int) -> str:
    if config.symbol is not None:
        return config.symbol
    if index == 0:
        return style.point_char
    return SERIES_SYMBOLS[index % len(SERIES_SYMBOLS)]


def contiguous_runs(mask: np.ndarray) -> list[tuple[int, int]]:
    idx = np.flatnonzero(mask)
    if idx.size == 0:
        return []
    runs: list[tuple[int, int]] = []
    start = int(idx[0])
    prev = int(idx[0])
    for v in idx[1:]:
        iv = int(v)
        if iv == prev + 1:
            prev = iv
            continue
        runs.append((start, prev + 1))
        start = iv
        prev = iv
    runs.append((start, prev + 1))
    return runs


def draw_series(
    frame: ChartFrame,
    xs: np.ndarray,
    ys: np.ndarray,
    *,
    style: LineStyle,
    symbol: str,
    color: str | None,
) -> None:
    transformer = frame.transformer
    pairs = list(zip(xs.tolist(), ys.tolist()))
    screen = [transformer.data_to_screen(p) for p in pairs]
    visible = [p for p in screen if p is not None]
    occupied: set[ScreenPoint] = set(visible) if style.show_points else set()

    if style.show_lines:
        lines = frame.canvas.layer(RenderPriority.LINES)
        subcell = frame.config.quality.use_subcell(frame.config.width)
        LOGGER.debug("rasterizing %d points (%s)", len(pairs), "braille" if subcell else "cells")
        for start, stop in contiguous_runs(np.asarray([p is not None for p in screen], dtype=bool)):
            if stop - start < 2:
                continue
            if subcell:
                fractional = [transformer.data_to_subcell(p) for p in pairs[start:stop]]
                draw_subcell_polyline(lines, [p for p in fractional if p is not None], color, skip=occupied)
            else:
                segment = [p for p in screen[start:stop] if p is not None]
                draw_polyline(lines, segment, style.line_char, color, skip=occupied, directional=style.directional)

    if style.show_points:
        draw_markers(frame.canvas.layer(RenderPriority.POINTS), visible, symbol, color)


def finish(frame: ChartFrame, legend: Sequence[LegendEntry] = ()) -> str:
    config = frame.config
    return compile_text(
        frame.canvas.flatten(),
        width=config.width,
        title=config.title,
        xlabel=config.xlabel,
        ylabel=config.ylabel,
        legend=legend,
        use_color=config.use_color,
    )
