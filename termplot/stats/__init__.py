from .boxplot import BoxStatistics, OutlierMethod, compute_box_statistics, percentile
from .density import DensityResult, Kernel, kernel_density, scott_bandwidth
from .histogram import HistogramResult, compute_histogram, sturges_bins

__all__ = [
    "BoxStatistics",
    "DensityResult",
    "HistogramResult",
    "Kernel",
    "OutlierMethod",
    "compute_box_statistics",
    "compute_histogram",
    "kernel_density",
    "percentile",
    "scott_bandwidth",
    "sturges_bins",
]
