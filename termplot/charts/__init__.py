from .bar import render_bar
from .boxplot import render_boxplot
from .density import render_density
from .histogram import render_histogram
from .line import render_line
from .scatter import render_scatter
from .violin import render_violin

__all__ = [
    "render_bar",
    "render_boxplot",
    "render_density",
    "render_histogram",
    "render_line",
    "render_scatter",
    "render_violin",
]
