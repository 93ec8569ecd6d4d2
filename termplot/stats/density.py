from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
import math

import numpy as np

from termplot.adapters.normalize import finite_values


DEFAULT_RESOLUTION = 200
MIN_RESOLUTION = 2
RANGE_EXTENSION = 0.1
# Bound on samples x grid points evaluated per chunk.
CHUNK_CELLS = 1 << 20

_SQRT_2PI = math.sqrt(2.0 * math.pi)


class Kernel(str, Enum):
    GAUSSIAN = "gaussian"
    EPANECHNIKOV = "epanechnikov"
    UNIFORM = "uniform"
    TRIANGULAR = "triangular"


def _gaussian(u: np.ndarray) -> np.ndarray:
    return np.exp(-0.5 * u * u) / _SQRT_2PI


def _epanechnikov(u: np.ndarray) -> np.ndarray:
    return np.where(np.abs(u) <= 1.0, 0.75 * (1.0 - u * u), 0.0)


def _uniform(u: np.ndarray) -> np.ndarray:
    return np.where(np.abs(u) <= 1.0, 0.5, 0.0)


def _triangular(u: np.ndarray) -> np.ndarray:
    return np.where(np.abs(u) <= 1.0, 1.0 - np.abs(u), 0.0)


KERNELS: dict[Kernel, Callable[[np.ndarray], np.ndarray]] = {
    Kernel.GAUSSIAN: _gaussian,
    Kernel.EPANECHNIKOV: _epanechnikov,
    Kernel.UNIFORM: _uniform,
    Kernel.TRIANGULAR: _triangular,
}


@dataclass(frozen=True)
class DensityResult:
    grid: np.ndarray
    density: np.ndarray
    bandwidth: float
    kernel: Kernel


def scott_bandwidth(values: np.ndarray) -> float:
    """Scott's rule ``1.06 * sigma * n^(-1/5)`` with a fallback for zero spread."""
    n = int(values.size)
    sigma = float(np.std(values, ddof=1)) if n > 1 else 0.0
    if sigma > 0.0 and math.isfinite(sigma):
        return 1.06 * sigma * n ** (-0.2)
    center = float(values[0]) if n else 0.0
    return abs(center) * 0.1 if center != 0.0 else 1.0


def kernel_density(
    values: np.ndarray,
    *,
    bandwidth: float | None = None,
    kernel: Kernel | str = Kernel.GAUSSIAN,
    resolution: int = DEFAULT_RESOLUTION,
    label: str = "density",
) -> DensityResult:
    kernel = Kernel(kernel)
    if resolution < MIN_RESOLUTION:
        raise ValueError(f"resolution must be >= {MIN_RESOLUTION}")
    if bandwidth is not None and not (math.isfinite(bandwidth) and bandwidth > 0):
        raise ValueError("bandwidth must be a positive finite number")

    data = finite_values(np.asarray(values, dtype=np.float64), label=label)
    h = float(bandwidth) if bandwidth is not None else scott_bandwidth(data)

    lo = float(np.min(data))
    hi = float(np.max(data))
    span = hi - lo
    if span > 0.0:
        lo -= span * RANGE_EXTENSION
        hi += span * RANGE_EXTENSION
    else:
        lo -= 3.0 * h
        hi += 3.0 * h
    grid = np.linspace(lo, hi, resolution)

    fn = KERNELS[kernel]
    density = np.zeros(resolution, dtype=np.float64)
    chunk = max(1, CHUNK_CELLS // resolution)
    for start in range(0, data.size, chunk):
        block = data[start : start + chunk]
        u = (grid[np.newaxis, :] - block[:, np.newaxis]) / h
        density += fn(u).sum(axis=0)
    density /= data.size * h
    return DensityResult(grid=grid, density=density, bandwidth=h, kernel=kernel)
