from __future__ import annotations

from typing import Any

import numpy as np

from termplot.adapters.normalize import normalize_dataset
from termplot.charts.base import build_frame, draw_series, finish, resolve_bounds
from termplot.config import LineStyle, RenderConfig
from termplot.raster.layers import RenderPriority
from termplot.scales import DataBounds
from termplot.stats.histogram import compute_histogram
from termplot.ticks import histogram_bin_ticks


BIN_CHAR = "█"
HEADROOM = 1.1


def render_histogram(
    data: Any,
    config: RenderConfig | None = None,
    *,
    bins: int | None = None,
    bin_width: float | None = None,
    normalize: bool = False,
    cumulative: bool = False,
    bin_labels: bool = False,
) -> str:
    """Histogram of the first column; ``cumulative`` draws running totals as a line."""
    config = config if config is not None else RenderConfig()
    column = normalize_dataset(data).column(0)
    hist = compute_histogram(
        column.values,
        bins=bins,
        bin_width=bin_width,
        normalize=normalize,
        cumulative=cumulative,
        label=column.name,
    )

    peak = float(np.max(hist.values))
    bounds = DataBounds(
        min_x=float(hist.edges[0]),
        max_x=float(hist.edges[-1]),
        min_y=0.0,
        max_y=peak * HEADROOM if peak > 0 else 1.0,
    )
    x_ticks = histogram_bin_ticks(hist.edges, config.width) if bin_labels else None
    frame = build_frame(config, resolve_bounds(bounds, config), x_ticks=x_ticks)

    if cumulative:
        symbol = config.symbol if config.symbol is not None else LineStyle().point_char
        draw_series(frame, hist.centers, hist.values, style=LineStyle(), symbol=symbol, color=config.color)
        return finish(frame)

    fill = config.symbol if config.symbol is not None else BIN_CHAR
    layer = frame.canvas.layer(RenderPriority.LINES)
    lo_y, hi_y = frame.bounds.min_y, frame.bounds.max_y
    for left_edge, right_edge, height in zip(hist.edges[:-1].tolist(), hist.edges[1:].tolist(), hist.values.tolist()):
        if height <= 0:
            continue
        left = frame.transformer.data_to_screen((left_edge, lo_y))
        right = frame.transformer.data_to_screen((right_edge, lo_y))
        top = frame.transformer.data_to_screen((left_edge, min(max(height, lo_y), hi_y)))
        if left is None or right is None or top is None:
            continue
        # Keep one blank column between bins that are wide enough for it.
        last_col = right.col - 1 if right.col - left.col >= 2 else left.col
        layer.fill_rect(left.col, top.row, last_col, frame.axis_row - 1, fill, config.color)
    return finish(frame)
