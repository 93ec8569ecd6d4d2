"""Axis tick selection.

Candidate step sizes are drawn from the 1-2-5 series around the raw step for
several tick counts, and each candidate layout is scored on simplicity,
coverage, density, label formatting and granularity. The best layout wins.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
import logging
import math

import numpy as np


LOGGER = logging.getLogger(__name__)

MAX_CANDIDATE_TICKS = 200
MAX_FIXED_DECIMALS = 6
SCIENTIFIC_THRESHOLD = 1e6


@dataclass(frozen=True)
class Tick:
    value: float
    label: str
    position: float | None = None


@dataclass(frozen=True)
class TickScoreWeights:
    simplicity: float = 0.3
    coverage: float = 3.0
    density: float = 1.0
    formatting: float = 1.0
    granularity: float = 0.2


@dataclass(frozen=True)
class TickConfig:
    target_ticks: int = 6
    available_space: int = 50
    max_decimal_places: int = 3
    weights: TickScoreWeights = field(default_factory=TickScoreWeights)

    def __post_init__(self) -> None:
        if self.max_decimal_places < 0:
            raise ValueError("max_decimal_places must be >= 0")
        if self.available_space < 0:
            raise ValueError("available_space must be >= 0")


@dataclass(frozen=True)
class TickResult:
    ticks: tuple[Tick, ...]
    step: float
    decimal_places: int
    tick_range: tuple[float, float]

    @property
    def values(self) -> np.ndarray:
        return np.asarray([t.value for t in self.ticks], dtype=np.float64)

    @property
    def labels(self) -> list[str]:
        return [t.label for t in self.ticks]


@dataclass(frozen=True)
class _Candidate:
    first: int
    count: int
    step: float
    decimals: int

    @property
    def start(self) -> float:
        return self.first * self.step

    @property
    def end(self) -> float:
        return (self.first + self.count - 1) * self.step


class TickGenerator:
    def __init__(self, config: TickConfig | None = None) -> None:
        self.config = config if config is not None else TickConfig()

    @classmethod
    def for_y_axis(cls, height: int, **overrides) -> "TickGenerator":
        target = int(np.clip(height // 4, 3, 8))
        return cls(TickConfig(target_ticks=target, available_space=max(0, height), max_decimal_places=2, **overrides))

    @classmethod
    def for_x_axis(cls, width: int, **overrides) -> "TickGenerator":
        target = int(np.clip(width // 10, 3, 10))
        return cls(TickConfig(target_ticks=target, available_space=max(0, width), max_decimal_places=1, **overrides))

    def generate_ticks(self, min_value: float, max_value: float) -> TickResult:
        if not (math.isfinite(min_value) and math.isfinite(max_value)):
            return TickResult(ticks=(), step=0.0, decimal_places=0, tick_range=(0.0, 0.0))
        if min_value > max_value:
            min_value, max_value = max_value, min_value

        span = max_value - min_value
        if span == 0.0:
            delta = abs(min_value) * 0.2 if min_value != 0.0 else 1.0
            return self.generate_ticks(min_value - delta, max_value + delta)
        if not math.isfinite(span):
            LOGGER.debug("tick range overflows float: %r..%r", min_value, max_value)
            return TickResult(ticks=(), step=0.0, decimal_places=0, tick_range=(min_value, max_value))

        target = max(1, self.config.target_ticks)
        best: _Candidate | None = None
        best_score = -math.inf
        for count in range(max(2, target - 2), target + 4):
            raw_step = span / (count - 1)
            for step in _candidate_steps(raw_step):
                candidate = self._build_candidate(min_value, max_value, step)
                if candidate is None:
                    continue
                score = self._score(candidate, min_value, max_value, target)
                if score > best_score:
                    best = candidate
                    best_score = score

        if best is None:
            return self._linear_fallback(min_value, max_value, target)
        LOGGER.debug("tick step %r selected for %r..%r (score %.3f)", best.step, min_value, max_value, best_score)
        return self._result(best, min_value, max_value)

    def _build_candidate(self, min_value: float, max_value: float, step: float) -> _Candidate | None:
        first_f = math.floor(min_value / step)
        last_f = math.ceil(max_value / step)
        if not (math.isfinite(first_f) and math.isfinite(last_f)):
            return None
        count = int(last_f) - int(first_f) + 1
        if count < 2 or count > MAX_CANDIDATE_TICKS:
            return None
        decimals = decimals_for_step(step, self.config.max_decimal_places)
        return _Candidate(first=int(first_f), count=count, step=step, decimals=decimals)

    def _score(self, candidate: _Candidate, min_value: float, max_value: float, target: int) -> float:
        weights = self.config.weights
        span = max_value - min_value

        tick_span = candidate.end - candidate.start
        overhang = max(0.0, min_value - candidate.start) + max(0.0, candidate.end - max_value)
        coverage = min(tick_span / span, 2.0) - (overhang / span) * 1.5

        actual = candidate.count
        density = (min(actual / target, target / actual) - min(abs(actual - target) / target, 1.0) * 0.5) * 2.0

        if candidate.decimals == 0:
            formatting = 0.5
        elif candidate.decimals == 1:
            formatting = 0.3
        elif candidate.decimals == 2:
            formatting = 0.1
        else:
            formatting = -0.2

        log_step = math.log10(candidate.step)
        frac = log_step - math.floor(log_step)
        granularity = 1.0 if frac < 0.1 or frac > 0.9 else 0.0

        return (
            weights.simplicity * _simplicity(candidate.step)
            + weights.coverage * coverage
            + weights.density * density
            + weights.formatting * formatting
            + weights.granularity * granularity
        )

    def _result(self, candidate: _Candidate, min_value: float, max_value: float) -> TickResult:
        step = candidate.step
        raw = np.arange(candidate.first, candidate.first + candidate.count, dtype=np.float64) * step
        span = max_value - min_value
        keep = (raw >= min_value - 2.0 * span) & (raw <= max_value + 2.0 * span)
        values = raw[keep]
        values[np.abs(values) <= step * 1e-9] = 0.0
        values = _strictly_increasing(values)
        labels, decimals = format_tick_labels(values, step, max_decimal_places=self.config.max_decimal_places)
        ticks = tuple(Tick(value=float(v), label=label) for v, label in zip(values.tolist(), labels))
        return TickResult(
            ticks=ticks,
            step=step,
            decimal_places=decimals,
            tick_range=(float(values[0]), float(values[-1])) if values.size else (min_value, max_value),
        )

    def _linear_fallback(self, min_value: float, max_value: float, target: int) -> TickResult:
        count = max(2, target)
        values = _strictly_increasing(np.linspace(min_value, max_value, count))
        step = (max_value - min_value) / (count - 1)
        labels, decimals = format_tick_labels(values, step, max_decimal_places=self.config.max_decimal_places)
        ticks = tuple(Tick(value=float(v), label=label) for v, label in zip(values.tolist(), labels))
        return TickResult(ticks=ticks, step=step, decimal_places=decimals, tick_range=(min_value, max_value))


def format_tick(value: float, decimals: int, *, scientific: bool = False) -> str:
    if not math.isfinite(value):
        return str(value)
    if scientific:
        if value == 0.0:
            return "0"
        return f"{value:.{decimals}e}"
    out = f"{value:.{decimals}f}"
    if out.startswith("-") and float(out) == 0.0:
        out = out[1:]
    return out


def format_tick_labels(values: np.ndarray, step: float, *, max_decimal_places: int) -> tuple[list[str], int]:
    """Format tick values with the precision their spacing needs.

    Precision is capped at ``max_decimal_places``. When the capped labels would
    read the same for different ticks, precision widens to what the step needs,
    up to ``MAX_FIXED_DECIMALS``. Scientific notation is used past that and for
    magnitudes from ``1e6``.
    """
    if values.size == 0:
        return [], 0
    needed = _required_decimals(step)
    max_abs = float(np.max(np.abs(values)))
    if max_abs >= SCIENTIFIC_THRESHOLD:
        return _scientific_labels(values, step, max_abs)

    decimals = min(max_decimal_places, needed)
    labels = [format_tick(v, decimals) for v in values.tolist()]
    if len(set(labels)) == len(labels) or decimals >= needed:
        return labels, decimals
    if needed <= MAX_FIXED_DECIMALS:
        return [format_tick(v, needed) for v in values.tolist()], needed
    return _scientific_labels(values, step, max_abs)


def _scientific_labels(values: np.ndarray, step: float, max_abs: float) -> tuple[list[str], int]:
    if max_abs == 0.0:
        return ["0" for _ in values.tolist()], 0
    precision = int(np.clip(math.floor(math.log10(max_abs)) - math.floor(math.log10(step)), 0, 6))
    return [format_tick(v, precision, scientific=True) for v in values.tolist()], precision


def decimals_for_step(step: float, cap: int) -> int:
    return min(cap, _required_decimals(step))


def histogram_bin_ticks(edges: Sequence[float] | np.ndarray, width: int) -> list[Tick]:
    """Bin-center ticks, thinned to about one label per 12 columns.

    Whole-number bins one unit wide are labelled by their start, other bins by
    their ``lo-hi`` range.
    """
    arr = np.asarray(edges, dtype=np.float64)
    num_bins = arr.size - 1
    if num_bins < 1:
        return []
    max_labels = min(max(width // 12, 3), num_bins)
    stride = max(1, -(-num_bins // max_labels))
    integral = bool(np.all(np.mod(arr, 1.0) == 0.0))
    ticks: list[Tick] = []
    for i in range(0, num_bins, stride):
        lo, hi = float(arr[i]), float(arr[i + 1])
        bin_width = hi - lo
        if integral and bin_width == 1.0:
            label = str(int(lo))
        elif bin_width >= 1.0:
            label = f"{lo:.0f}-{hi:.0f}"
        else:
            label = f"{lo:.1f}-{hi:.1f}"
        ticks.append(Tick(value=(lo + hi) / 2.0, label=label))
    return ticks


def _candidate_steps(raw_step: float) -> list[float]:
    if raw_step <= 0.0 or not math.isfinite(raw_step):
        return []
    exponent = math.floor(math.log10(raw_step))
    steps: set[float] = set()
    for k in (exponent - 1, exponent, exponent + 1):
        magnitude = _pow10(k)
        if magnitude is None:
            continue
        for nice in (1.0, 2.0, 5.0, 10.0):
            step = nice * magnitude
            if step > 0.0 and math.isfinite(step):
                steps.add(step)
    return sorted(steps)


def _pow10(exponent: int) -> float | None:
    try:
        value = 10.0 ** exponent
    except OverflowError:
        return None
    if value == 0.0 or not math.isfinite(value):
        return None
    return value


def _simplicity(step: float) -> float:
    exponent = math.floor(math.log10(step))
    magnitude = _pow10(exponent)
    if magnitude is None:
        return 0.0
    mantissa = step / magnitude
    for nice, score in ((1.0, 1.0), (2.0, 0.8), (5.0, 0.6), (10.0, 1.0)):
        if math.isclose(mantissa, nice, rel_tol=1e-9):
            return score
    return 0.0


def _required_decimals(step: float) -> int:
    if step <= 0.0 or not math.isfinite(step):
        return 0
    try:
        exponent = Decimal(repr(step)).normalize().as_tuple().exponent
    except InvalidOperation:
        exponent = 0
    digits = max(0, -int(exponent)) if isinstance(exponent, int) else 0
    if step < 1.0:
        digits = max(digits, math.ceil(-math.log10(step)))
    return digits


def _strictly_increasing(values: np.ndarray) -> np.ndarray:
    if values.size < 2:
        return values
    keep = np.ones(values.size, dtype=bool)
    last = values[0]
    for i in range(1, values.size):
        if values[i] <= last:
            keep[i] = False
        else:
            last = values[i]
    return values[keep]
