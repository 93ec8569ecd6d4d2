from __future__ import annotations

from typing import Any

import numpy as np

from termplot.adapters.normalize import normalize_dataset
from termplot.charts.base import build_frame, draw_series, finish, resolve_bounds, series_symbol, xy_series
from termplot.config import LineStyle, RenderConfig
from termplot.scales import DataBounds


def render_scatter(data: Any, config: RenderConfig | None = None, *, style: LineStyle | None = None) -> str:
    config = config if config is not None else RenderConfig()
    style = style if style is not None else LineStyle.points_only()
    dataset = normalize_dataset(data)
    dataset.require_columns(2, message="scatter plot requires at least 2 columns (x and y)")
    series = xy_series(dataset)

    bounds = DataBounds.from_values(
        np.concatenate([x for _, x, _ in series]),
        np.concatenate([y for _, _, y in series]),
    )
    frame = build_frame(config, resolve_bounds(bounds, config))

    legend = []
    for i, (name, x, y) in enumerate(series):
        symbol = series_symbol(config, style, i)
        draw_series(frame, x, y, style=style, symbol=symbol, color=config.color)
        legend.append((symbol, name, config.color))
    return finish(frame, legend if len(series) > 1 else ())
