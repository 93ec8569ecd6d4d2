from __future__ import annotations


class PlotDataError(ValueError):
    """Raised when input data cannot be plotted."""
