from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

import numpy as np

from termplot.errors import PlotDataError


@dataclass(frozen=True)
class NumericCoordinate:
    x: float
    y: float


@dataclass(frozen=True)
class CategoricalCoordinate:
    label: str
    y: float


Coordinate = Union[NumericCoordinate, CategoricalCoordinate]


@dataclass(frozen=True)
class Series:
    name: str
    values: np.ndarray

    def __len__(self) -> int:
        return int(self.values.size)


@dataclass(frozen=True)
class CategoricalSeries:
    labels: tuple[str, ...]
    values: np.ndarray
    name: str = "value"

    def __post_init__(self) -> None:
        if len(self.labels) != self.values.size:
            raise PlotDataError(f"labels and values length mismatch: {len(self.labels)} != {self.values.size}")
        if len(set(self.labels)) != len(self.labels):
            raise PlotDataError("category labels must be unique")


@dataclass
class Dataset:
    """Ordered collection of named numeric columns."""

    columns: list[Series] = field(default_factory=list)

    @property
    def headers(self) -> tuple[str, ...]:
        return tuple(col.name for col in self.columns)

    @property
    def num_columns(self) -> int:
        return len(self.columns)

    @property
    def num_rows(self) -> int:
        return max((len(col) for col in self.columns), default=0)

    def is_empty(self) -> bool:
        return self.num_rows == 0

    def column(self, index: int) -> Series:
        try:
            return self.columns[index]
        except IndexError as exc:
            raise PlotDataError(f"column index out of range: {index}") from exc

    def require_columns(self, count: int, *, message: str | None = None) -> None:
        if self.num_columns < count:
            raise PlotDataError(message or f"at least {count} column(s) required, got {self.num_columns}")

    def require_equal_lengths(self) -> None:
        if not self.columns:
            return
        first = len(self.columns[0])
        for col in self.columns[1:]:
            if len(col) != first:
                raise PlotDataError(f"column length mismatch: {self.columns[0].name}={first} != {col.name}={len(col)}")
