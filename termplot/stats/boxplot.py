from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math

import numpy as np

from termplot.adapters.normalize import finite_values


class OutlierMethod(str, Enum):
    IQR = "iqr"
    TUKEY = "tukey"
    NONE = "none"


FENCE_MULTIPLIERS = {
    OutlierMethod.IQR: 1.5,
    OutlierMethod.TUKEY: 3.0,
}
NOTCH_FACTOR = 1.57


@dataclass(frozen=True)
class BoxStatistics:
    count: int
    minimum: float
    maximum: float
    q1: float
    median: float
    q3: float
    mean: float
    lower_whisker: float
    upper_whisker: float
    lower_fence: float
    upper_fence: float
    outliers: tuple[float, ...]
    notch_low: float
    notch_high: float

    @property
    def iqr(self) -> float:
        return self.q3 - self.q1


def percentile(sorted_values: np.ndarray, p: float) -> float:
    """Linear-interpolation percentile of pre-sorted values, ``p`` in [0, 1]."""
    if sorted_values.size == 0:
        raise ValueError("percentile of empty data")
    if not 0.0 <= p <= 1.0:
        raise ValueError("p must be in [0, 1]")
    pos = p * (sorted_values.size - 1)
    lower = int(math.floor(pos))
    upper = min(lower + 1, sorted_values.size - 1)
    frac = pos - lower
    return float(sorted_values[lower] + (sorted_values[upper] - sorted_values[lower]) * frac)


def compute_box_statistics(
    values: np.ndarray,
    *,
    method: OutlierMethod | str = OutlierMethod.IQR,
    multiplier: float | None = None,
    label: str = "box plot",
) -> BoxStatistics:
    method = OutlierMethod(method)
    if multiplier is not None and not (math.isfinite(multiplier) and multiplier >= 0):
        raise ValueError("multiplier must be a non-negative finite number")

    data = np.sort(finite_values(np.asarray(values, dtype=np.float64), label=label))
    q1 = percentile(data, 0.25)
    median = percentile(data, 0.5)
    q3 = percentile(data, 0.75)
    iqr = q3 - q1
    lo = float(data[0])
    hi = float(data[-1])

    if method is OutlierMethod.NONE and multiplier is None:
        lower_fence, upper_fence = lo, hi
    else:
        k = multiplier if multiplier is not None else FENCE_MULTIPLIERS.get(method, 1.5)
        lower_fence, upper_fence = q1 - k * iqr, q3 + k * iqr

    inside = data[(data >= lower_fence) & (data <= upper_fence)]
    outliers = data[(data < lower_fence) | (data > upper_fence)]
    lower_whisker = float(inside[0]) if inside.size else lo
    upper_whisker = float(inside[-1]) if inside.size else hi

    notch = NOTCH_FACTOR * iqr / math.sqrt(data.size)
    return BoxStatistics(
        count=int(data.size),
        minimum=lo,
        maximum=hi,
        q1=q1,
        median=median,
        q3=q3,
        mean=float(np.mean(data)),
        lower_whisker=min(lower_whisker, q1),
        upper_whisker=max(upper_whisker, q3),
        lower_fence=lower_fence,
        upper_fence=upper_fence,
        outliers=tuple(float(v) for v in outliers.tolist()),
        notch_low=median - notch,
        notch_high=median + notch,
    )
