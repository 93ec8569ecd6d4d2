from __future__ import annotations

from collections.abc import Callable
from typing import Any

from termplot.charts import (
    render_bar,
    render_boxplot,
    render_density,
    render_histogram,
    render_line,
    render_scatter,
    render_violin,
)
from termplot.config import RenderConfig
from termplot.display import DEFAULT_MIN_HEIGHT, DEFAULT_MIN_WIDTH, resolve_default_canvas_size
from termplot.errors import PlotDataError


CHARTS: dict[str, Callable[..., str]] = {
    "line": render_line,
    "scatter": render_scatter,
    "bar": render_bar,
    "histogram": render_histogram,
    "density": render_density,
    "boxplot": render_boxplot,
    "violin": render_violin,
}


def default_config(
    *,
    min_width: int = DEFAULT_MIN_WIDTH,
    min_height: int = DEFAULT_MIN_HEIGHT,
    **overrides: Any,
) -> RenderConfig:
    """Build a config sized to the terminal unless width/height are given."""
    width = overrides.pop("width", None)
    height = overrides.pop("height", None)
    if width is None or height is None:
        term_w, term_h = resolve_default_canvas_size(min_width=min_width, min_height=min_height)
        width = term_w if width is None else width
        height = term_h if height is None else height
    return RenderConfig(width=width, height=height, **overrides)


def render(kind: str, data: Any, config: RenderConfig | None = None, **options: Any) -> str:
    try:
        chart = CHARTS[kind]
    except KeyError:
        raise PlotDataError(f"unknown chart kind: {kind!r} (expected one of {', '.join(sorted(CHARTS))})") from None
    return chart(data, config if config is not None else default_config(), **options)
