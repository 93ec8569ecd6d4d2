from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np

from termplot.adapters.normalize import finite_values


MAX_AUTO_BINS = 50
MAX_BINS = 10_000


@dataclass(frozen=True)
class HistogramResult:
    edges: np.ndarray
    counts: np.ndarray
    values: np.ndarray
    bin_width: float
    normalized: bool = False
    cumulative: bool = False

    @property
    def num_bins(self) -> int:
        return int(self.counts.size)

    @property
    def centers(self) -> np.ndarray:
        return (self.edges[:-1] + self.edges[1:]) / 2.0


def sturges_bins(n: int) -> int:
    if n <= 0:
        return 1
    return int(min(MAX_AUTO_BINS, max(1, math.ceil(math.log2(n) + 1))))


def compute_histogram(
    values: np.ndarray,
    *,
    bins: int | None = None,
    bin_width: float | None = None,
    normalize: bool = False,
    cumulative: bool = False,
    label: str = "histogram",
) -> HistogramResult:
    """Bin finite samples into equal-width bins.

    ``values`` holds raw counts, the fraction of samples when ``normalize`` is
    set, and running totals when ``cumulative`` is set. The maximum sample
    lands in the last bin.
    """
    if bins is not None and bins < 1:
        raise ValueError("bins must be >= 1")
    if bins is not None and bins > MAX_BINS:
        raise ValueError(f"bins must be <= {MAX_BINS}, got {bins}")
    if bin_width is not None and not (math.isfinite(bin_width) and bin_width > 0):
        raise ValueError("bin_width must be a positive finite number")

    data = finite_values(np.asarray(values, dtype=np.float64), label=label)
    lo = float(np.min(data))
    hi = float(np.max(data))
    if hi == lo:
        # Unit-wide window centered on the single distinct value.
        lo -= 0.5
        hi += 0.5

    if bin_width is not None:
        ratio = (hi - lo) / bin_width
        if not ratio <= MAX_BINS:
            raise ValueError(f"bin_width {bin_width!r} gives more than {MAX_BINS} bins over [{lo!r}, {hi!r}]")
        num_bins = max(1, int(math.ceil(ratio)))
        width = float(bin_width)
    else:
        num_bins = bins if bins is not None else sturges_bins(int(data.size))
        width = (hi - lo) / num_bins

    edges = lo + np.arange(num_bins + 1, dtype=np.float64) * width
    idx = np.floor((data - lo) / width).astype(np.int64)
    np.clip(idx, 0, num_bins - 1, out=idx)
    counts = np.bincount(idx, minlength=num_bins).astype(np.int64)

    heights = counts.astype(np.float64)
    if normalize:
        heights = heights / float(data.size)
    if cumulative:
        heights = np.cumsum(heights)
    return HistogramResult(
        edges=edges,
        counts=counts,
        values=heights,
        bin_width=width,
        normalized=normalize,
        cumulative=cumulative,
    )
