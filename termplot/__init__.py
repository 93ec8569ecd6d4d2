from termplot.api import default_config, render
from termplot.charts import (
    render_bar,
    render_boxplot,
    render_density,
    render_histogram,
    render_line,
    render_scatter,
    render_violin,
)
from termplot.config import LineStyle, RenderConfig, RenderQuality
from termplot.errors import PlotDataError
from termplot.series import CategoricalCoordinate, CategoricalSeries, Dataset, NumericCoordinate, Series

__all__ = [
    "CategoricalCoordinate",
    "CategoricalSeries",
    "Dataset",
    "LineStyle",
    "NumericCoordinate",
    "PlotDataError",
    "RenderConfig",
    "RenderQuality",
    "Series",
    "default_config",
    "render",
    "render_bar",
    "render_boxplot",
    "render_density",
    "render_histogram",
    "render_line",
    "render_scatter",
    "render_violin",
]
