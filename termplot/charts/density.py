from __future__ import annotations

from typing import Any

import numpy as np

from termplot.adapters.normalize import normalize_dataset
from termplot.charts.base import build_frame, draw_series, finish, resolve_bounds
from termplot.config import LineStyle, RenderConfig
from termplot.scales import DataBounds
from termplot.stats.density import DEFAULT_RESOLUTION, Kernel, kernel_density


HEADROOM = 1.1
SERIES_LINE_CHARS = ("·", "∙", "•", "○")


def render_density(
    data: Any,
    config: RenderConfig | None = None,
    *,
    bandwidth: float | None = None,
    kernel: Kernel | str = Kernel.GAUSSIAN,
    resolution: int = DEFAULT_RESOLUTION,
) -> str:
    """Kernel density curve for every column of ``data``."""
    config = config if config is not None else RenderConfig()
    dataset = normalize_dataset(data)
    curves = [
        (col.name, kernel_density(col.values, bandwidth=bandwidth, kernel=kernel, resolution=resolution, label=col.name))
        for col in dataset.columns
    ]

    peak = max(float(np.max(result.density)) for _, result in curves)
    bounds = DataBounds(
        min_x=min(float(result.grid[0]) for _, result in curves),
        max_x=max(float(result.grid[-1]) for _, result in curves),
        min_y=0.0,
        max_y=peak * HEADROOM if peak > 0 else 1.0,
    )
    frame = build_frame(config, resolve_bounds(bounds, config))

    legend = []
    for i, (name, result) in enumerate(curves):
        line_char = config.symbol if config.symbol is not None else SERIES_LINE_CHARS[i % len(SERIES_LINE_CHARS)]
        style = LineStyle(line_char=line_char, show_points=False)
        draw_series(frame, result.grid, result.density, style=style, symbol=line_char, color=config.color)
        legend.append((line_char, name, config.color))
    return finish(frame, legend if len(curves) > 1 else ())
