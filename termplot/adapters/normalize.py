from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
import logging
from typing import Any

import numpy as np

from termplot.errors import PlotDataError
from termplot.series import CategoricalSeries, Dataset, Series


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


LOGGER = logging.getLogger(__name__)


def normalize_dataset(data: Any, *, headers: Sequence[str] | None = None) -> Dataset:
    """Coerce supported tabular inputs into a :class:`Dataset`.

    Accepted inputs: an existing ``Dataset``, a mapping of column name to
    values, a sequence of columns, a 1-D sequence (single column), a 1-D or
    2-D ndarray (columns along axis 1), a pandas DataFrame/Series or a
    torch tensor.
    """
    if isinstance(data, Dataset):
        return data

    if pd is not None and isinstance(data, pd.DataFrame):
        numeric_cols = [c for c in data.columns if _is_numeric_dtype(data[c])]
        if not numeric_cols:
            raise PlotDataError("DataFrame input has no numeric columns")
        return _build(
            [(str(c), _coerce_1d_numeric(data[c], label=str(c))) for c in numeric_cols],
            headers=headers,
        )

    if pd is not None and isinstance(data, pd.Series):
        name = str(data.name) if data.name is not None else "y"
        return _build([(name, _coerce_1d_numeric(data, label=name))], headers=headers)

    if torch is not None and isinstance(data, torch.Tensor):
        data = data.detach().cpu().to(torch.float64).numpy()

    if isinstance(data, Mapping):
        return _build([(str(k), _coerce_1d_numeric(v, label=str(k))) for k, v in data.items()], headers=headers)

    if isinstance(data, np.ndarray):
        if data.ndim == 1:
            return _build([("y", _coerce_ndarray(data, label="y"))], headers=headers)
        if data.ndim == 2:
            return _build(
                [(f"col{i}", _coerce_ndarray(data[:, i], label=f"col{i}")) for i in range(data.shape[1])],
                headers=headers,
            )
        raise PlotDataError("array input must be 1-D or 2-D")

    if isinstance(data, Sequence) and not isinstance(data, (str, bytes, bytearray)):
        if len(data) == 0:
            raise PlotDataError("empty series")
        if all(_is_column_like(item) for item in data):
            return _build(
                [(f"col{i}", _coerce_1d_numeric(col, label=f"col{i}")) for i, col in enumerate(data)],
                headers=headers,
            )
        return _build([("y", _coerce_1d_numeric(data, label="y"))], headers=headers)

    raise PlotDataError(f"unsupported dataset input type: {type(data)!r}")


def normalize_categorical(data: Any, *, name: str = "value") -> CategoricalSeries:
    """Coerce ``(label, value)`` pairs, a mapping or a pandas Series into categories."""
    if isinstance(data, CategoricalSeries):
        return data
    if pd is not None and isinstance(data, pd.Series):
        labels = tuple(str(v) for v in data.index.tolist())
        return CategoricalSeries(labels=labels, values=_coerce_1d_numeric(data, label=name), name=name)
    if isinstance(data, Mapping):
        items = list(data.items())
    elif isinstance(data, Sequence) and not isinstance(data, (str, bytes, bytearray)):
        items = list(data)
        if any(not isinstance(item, Sequence) or isinstance(item, str) or len(item) != 2 for item in items):
            raise PlotDataError("categorical input must be (label, value) pairs")
    else:
        raise PlotDataError(f"unsupported categorical input type: {type(data)!r}")
    if not items:
        raise PlotDataError("empty series")
    labels = tuple(str(label) for label, _ in items)
    values = _coerce_ndarray(np.asarray([v for _, v in items], dtype=object), label=name)
    return CategoricalSeries(labels=labels, values=values, name=name)


def is_categorical_input(data: Any) -> bool:
    if isinstance(data, CategoricalSeries):
        return True
    if isinstance(data, Mapping):
        return bool(data) and all(_is_scalar(v) for v in data.values())
    if isinstance(data, Sequence) and not isinstance(data, (str, bytes, bytearray)) and data:
        return all(
            isinstance(item, Sequence) and not isinstance(item, str) and len(item) == 2 and isinstance(item[0], str)
            for item in data
        )
    return False


def finite_values(values: np.ndarray, *, label: str) -> np.ndarray:
    mask = np.isfinite(values)
    skipped = int(values.size - np.count_nonzero(mask))
    if skipped:
        LOGGER.warning("%s: skipping %d non-finite value(s)", label, skipped)
    out = values[mask]
    if out.size == 0:
        raise PlotDataError(f"{label}: series contains no finite points")
    return out


def finite_pairs(x: np.ndarray, y: np.ndarray, *, label: str) -> tuple[np.ndarray, np.ndarray]:
    if x.shape != y.shape:
        raise PlotDataError(f"x and y length mismatch: {x.size} != {y.size}")
    mask = np.isfinite(x) & np.isfinite(y)
    skipped = int(mask.size - np.count_nonzero(mask))
    if skipped:
        LOGGER.warning("%s: skipping %d non-finite point(s)", label, skipped)
    if not np.any(mask):
        raise PlotDataError(f"{label}: series contains no finite points")
    return x[mask], y[mask]


def _build(columns: list[tuple[str, np.ndarray]], *, headers: Sequence[str] | None) -> Dataset:
    if headers is not None:
        if len(headers) != len(columns):
            raise PlotDataError(f"header count mismatch: {len(headers)} != {len(columns)}")
        columns = [(str(h), arr) for h, (_, arr) in zip(headers, columns)]
    dataset = Dataset(columns=[Series(name=name, values=arr) for name, arr in columns])
    if dataset.is_empty():
        raise PlotDataError("empty series")
    return dataset


def _is_column_like(value: Any) -> bool:
    if isinstance(value, np.ndarray):
        return value.ndim == 1
    if pd is not None and isinstance(value, pd.Series):
        return True
    if torch is not None and isinstance(value, torch.Tensor):
        return value.ndim == 1
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal, np.integer, np.floating)) and not isinstance(value, bool)


def _is_numeric_dtype(series: Any) -> bool:
    if pd is None:
        return False
    try:
        return bool(pd.api.types.is_numeric_dtype(series))
    except Exception:
        return False


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(value, dtype=object), label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)
    if arr.ndim != 1:
        raise PlotDataError(f"{label} must be 1-D")

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
