from __future__ import annotations

from typing import Any

import numpy as np

from termplot.adapters.normalize import finite_values, normalize_dataset
from termplot.charts.base import ChartFrame, build_frame, finish
from termplot.config import RenderConfig
from termplot.errors import PlotDataError
from termplot.raster.layers import RenderPriority
from termplot.scales import CategoricalAxis, DataBounds, padded_range
from termplot.series import CategoricalCoordinate
from termplot.stats.boxplot import BoxStatistics, OutlierMethod, compute_box_statistics
from termplot.stats.density import DensityResult, Kernel, kernel_density
from termplot.ticks import Tick


MIN_SAMPLES = 3
VIOLIN_RESOLUTION = 100
VALUE_PADDING = 0.05
MAX_HALF_WIDTH = 8
# Densities below this fraction of the peak are not drawn.
MIN_VISIBLE_DENSITY = 0.02

EDGE_CHAR = "·"
FILL_CHAR = "░"
QUARTILE_CHAR = "─"
MEDIAN_CHAR = "━"


def render_violin(
    data: Any,
    config: RenderConfig | None = None,
    *,
    bandwidth: float | None = None,
    kernel: Kernel | str = Kernel.GAUSSIAN,
    show_quartiles: bool = True,
    show_median: bool = True,
) -> str:
    """Mirrored density outline per column, with quartile and median marks."""
    config = config if config is not None else RenderConfig()
    dataset = normalize_dataset(data)

    violins: list[tuple[str, DensityResult, BoxStatistics]] = []
    samples: list[np.ndarray] = []
    for col in dataset.columns:
        values = finite_values(col.values, label=col.name)
        if values.size < MIN_SAMPLES:
            raise PlotDataError(
                f"{col.name}: violin plot needs at least {MIN_SAMPLES} finite values, got {values.size}"
            )
        density = kernel_density(
            values, bandwidth=bandwidth, kernel=kernel, resolution=VIOLIN_RESOLUTION, label=col.name
        )
        stats = compute_box_statistics(values, method=OutlierMethod.NONE, label=col.name)
        violins.append((col.name, density, stats))
        samples.append(values)

    lo, hi = padded_range(np.concatenate(samples), ratio=VALUE_PADDING)
    labels = [name for name, _, _ in violins]
    axis = CategoricalAxis(labels)
    c_lo, c_hi = axis.bounds_x()
    bounds = DataBounds(min_x=c_lo, max_x=c_hi, min_y=lo, max_y=hi).with_limits(None, config.ylim)
    x_ticks = [
        Tick(value=float(i), label=name, position=axis.position(name, c_lo, c_hi)) for i, name in enumerate(labels)
    ]
    frame = build_frame(config, bounds, x_ticks=x_ticks, categories=axis)

    slot = frame.area.width // max(1, len(violins))
    half = max(1, min(MAX_HALF_WIDTH, (slot - 2) // 2))
    for name, density, stats in violins:
        _draw_violin(frame, name, density, stats, half, show_quartiles, show_median)
    return finish(frame)


def _draw_violin(
    frame: ChartFrame,
    name: str,
    density: DensityResult,
    stats: BoxStatistics,
    half: int,
    show_quartiles: bool,
    show_median: bool,
) -> None:
    transformer = frame.transformer
    color = frame.config.color

    def row_of(value: float) -> int | None:
        point = transformer.data_to_screen(CategoricalCoordinate(label=name, y=value))
        if point is None or point.row >= frame.axis_row:
            return None
        return point.row

    anchor = transformer.data_to_screen(CategoricalCoordinate(label=name, y=frame.bounds.min_y))
    if anchor is None:
        return
    center = anchor.col

    peak = float(np.max(density.density))
    if peak <= 0.0:
        return
    # Widest extent per row across all grid points landing on it.
    widths: dict[int, int] = {}
    for y, d in zip(density.grid.tolist(), density.density.tolist()):
        share = d / peak
        if share < MIN_VISIBLE_DENSITY:
            continue
        row = row_of(y)
        if row is None:
            continue
        widths[row] = max(widths.get(row, 0), int(round(share * half)))

    body = frame.canvas.layer(RenderPriority.LINES)
    for row, w in widths.items():
        if w > 0:
            body.draw_hline(center - w + 1, center + w - 1, row, FILL_CHAR, color)
        body.put(center - w, row, EDGE_CHAR, color)
        body.put(center + w, row, EDGE_CHAR, color)

    marks = frame.canvas.layer(RenderPriority.POINTS)
    if show_quartiles:
        quarter = max(1, half // 2)
        for value in (stats.q1, stats.q3):
            row = row_of(value)
            if row is not None:
                marks.draw_hline(center - quarter, center + quarter, row, QUARTILE_CHAR, color)
    if show_median:
        row = row_of(stats.median)
        if row is not None:
            wide = max(1, (3 * half) // 4)
            marks.draw_hline(center - wide, center + wide, row, MEDIAN_CHAR, color)
