from __future__ import annotations

from decimal import Decimal
import unittest

import numpy as np

from termplot.adapters.normalize import (
    finite_pairs,
    is_categorical_input,
    normalize_categorical,
    normalize_dataset,
    pd,
    torch,
)
from termplot.errors import PlotDataError
from termplot.series import CategoricalSeries, Dataset


class NormalizeDatasetTests(unittest.TestCase):
    def test_flat_sequence_is_single_column(self) -> None:
        dataset = normalize_dataset([1, 2, 3])
        self.assertEqual(dataset.headers, ("y",))
        self.assertEqual(dataset.column(0).values.dtype, np.float64)

    def test_decimal_and_none_values(self) -> None:
        dataset = normalize_dataset([Decimal("1.5"), None, 3])
        values = dataset.column(0).values
        self.assertEqual(values[0], 1.5)
        self.assertTrue(np.isnan(values[1]))

    def test_mapping_and_nested_columns(self) -> None:
        mapped = normalize_dataset({"x": [0, 1], "y": [2, 3]})
        self.assertEqual(mapped.headers, ("x", "y"))
        nested = normalize_dataset([[0, 1], [2, 3]], headers=["t", "v"])
        self.assertEqual(nested.headers, ("t", "v"))
        self.assertEqual(nested.column(1).values.tolist(), [2.0, 3.0])

    def test_two_dimensional_array_splits_columns(self) -> None:
        dataset = normalize_dataset(np.arange(6).reshape(3, 2))
        self.assertEqual(dataset.num_columns, 2)
        self.assertEqual(dataset.column(1).values.tolist(), [1.0, 3.0, 5.0])

    def test_existing_dataset_passes_through(self) -> None:
        dataset = normalize_dataset({"a": [1.0]})
        self.assertIs(normalize_dataset(dataset), dataset)
        self.assertIsInstance(dataset, Dataset)

    def test_rejects_bad_input(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_dataset([])
        with self.assertRaises(PlotDataError):
            normalize_dataset(["a", "b"])
        with self.assertRaises(PlotDataError):
            normalize_dataset({"x": [1, 2]}, headers=["a", "b"])
        with self.assertRaises(PlotDataError):
            normalize_dataset(42)
        with self.assertRaises(PlotDataError):
            normalize_dataset(np.zeros((2, 2, 2)))

    def test_finite_pairs_filters_and_checks_shape(self) -> None:
        with self.assertLogs("termplot.adapters.normalize", level="WARNING"):
            x, y = finite_pairs(np.asarray([0.0, 1.0, 2.0]), np.asarray([1.0, np.nan, 3.0]), label="y")
        self.assertEqual(x.tolist(), [0.0, 2.0])
        self.assertEqual(y.tolist(), [1.0, 3.0])
        with self.assertRaises(PlotDataError):
            finite_pairs(np.asarray([0.0]), np.asarray([1.0, 2.0]), label="y")

    def test_pandas_dataframe_keeps_numeric_columns(self) -> None:
        if pd is None:
            self.skipTest("pandas not installed")
        frame = pd.DataFrame({"t": [0, 1, 2], "name": ["a", "b", "c"], "v": [1.5, 2.5, 3.5]})
        dataset = normalize_dataset(frame)
        self.assertEqual(dataset.headers, ("t", "v"))

    def test_torch_tensor_columns(self) -> None:
        if torch is None:
            self.skipTest("torch not installed")
        dataset = normalize_dataset({"v": torch.tensor([1.0, 2.0, 3.0])})
        self.assertEqual(dataset.column(0).values.tolist(), [1.0, 2.0, 3.0])


class NormalizeCategoricalTests(unittest.TestCase):
    def test_pairs_and_mappings_are_categorical(self) -> None:
        self.assertTrue(is_categorical_input([("a", 1), ("b", 2)]))
        self.assertTrue(is_categorical_input({"a": 1, "b": 2.5}))
        self.assertFalse(is_categorical_input({"a": [1, 2]}))
        self.assertFalse(is_categorical_input([1, 2]))

    def test_normalize_pairs(self) -> None:
        series = normalize_categorical([("a", 1), ("b", Decimal("2.5"))])
        self.assertIsInstance(series, CategoricalSeries)
        self.assertEqual(series.labels, ("a", "b"))
        self.assertEqual(series.values.tolist(), [1.0, 2.5])

    def test_duplicate_labels_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_categorical([("a", 1), ("a", 2)])

    def test_pandas_series_uses_index_as_labels(self) -> None:
        if pd is None:
            self.skipTest("pandas not installed")
        series = normalize_categorical(pd.Series([3, 4], index=["x", "y"]))
        self.assertEqual(series.labels, ("x", "y"))


if __name__ == "__main__":
    unittest.main()
