from __future__ import annotations

import unittest

import numpy as np

from termplot.errors import PlotDataError
from termplot.stats.boxplot import OutlierMethod, compute_box_statistics, percentile
from termplot.stats.density import Kernel, kernel_density, scott_bandwidth
from termplot.stats.histogram import compute_histogram, sturges_bins


def _area(grid: np.ndarray, density: np.ndarray) -> float:
    return float(np.sum((density[1:] + density[:-1]) / 2.0 * np.diff(grid)))


class HistogramTests(unittest.TestCase):
    def test_five_bins_over_small_sample(self) -> None:
        hist = compute_histogram(np.asarray([1, 2, 2, 3, 3, 3, 4, 4, 5], dtype=np.float64), bins=5)
        self.assertEqual(hist.counts.tolist(), [1, 2, 3, 2, 1])
        self.assertEqual(int(hist.counts.sum()), 9)
        self.assertEqual(float(hist.edges[0]), 1.0)
        self.assertAlmostEqual(float(hist.edges[-1]), 5.0)

    def test_counts_sum_to_finite_samples(self) -> None:
        rng = np.random.default_rng(3)
        data = rng.normal(size=1000)
        data[::97] = np.nan
        with self.assertLogs("termplot.adapters.normalize", level="WARNING"):
            hist = compute_histogram(data)
        self.assertEqual(int(hist.counts.sum()), int(np.isfinite(data).sum()))

    def test_maximum_lands_in_last_bin(self) -> None:
        hist = compute_histogram(np.asarray([0.0, 10.0]), bins=4)
        self.assertEqual(hist.counts.tolist(), [1, 0, 0, 1])

    def test_sturges_rule_is_clamped(self) -> None:
        self.assertEqual(sturges_bins(9), 5)
        self.assertEqual(sturges_bins(1), 1)
        self.assertEqual(sturges_bins(10**30), 50)

    def test_bin_width_option(self) -> None:
        hist = compute_histogram(np.asarray([0.0, 1.0, 2.0, 3.0, 4.0]), bin_width=1.0)
        self.assertEqual(hist.num_bins, 4)
        self.assertEqual(hist.counts.tolist(), [1, 1, 1, 2])

    def test_bin_count_has_a_ceiling(self) -> None:
        with self.assertRaisesRegex(ValueError, "more than 10000 bins"):
            compute_histogram(np.asarray([0.0, 1000.0]), bin_width=1e-9)
        with self.assertRaises(ValueError):
            compute_histogram(np.asarray([-1e308, 1e308]), bin_width=1.0)
        with self.assertRaises(ValueError):
            compute_histogram(np.asarray([0.0, 1.0]), bins=10**9)
        self.assertEqual(compute_histogram(np.asarray([0.0, 1000.0]), bin_width=0.125).num_bins, 8000)

    def test_normalized_and_cumulative_values(self) -> None:
        data = np.asarray([1.0, 2.0, 2.0, 3.0])
        normalized = compute_histogram(data, bins=2, normalize=True)
        self.assertAlmostEqual(float(normalized.values.sum()), 1.0)
        cumulative = compute_histogram(data, bins=2, cumulative=True)
        self.assertEqual(cumulative.values.tolist(), [1.0, 4.0])

    def test_constant_data_is_not_an_error(self) -> None:
        hist = compute_histogram(np.asarray([7.0, 7.0, 7.0]), bins=3)
        self.assertEqual(int(hist.counts.sum()), 3)
        self.assertLess(float(hist.edges[0]), 7.0)
        self.assertGreater(float(hist.edges[-1]), 7.0)

    def test_invalid_arguments(self) -> None:
        with self.assertRaises(ValueError):
            compute_histogram(np.asarray([1.0, 2.0]), bins=0)
        with self.assertRaises(ValueError):
            compute_histogram(np.asarray([1.0, 2.0]), bin_width=-1.0)
        with self.assertRaises(PlotDataError):
            compute_histogram(np.asarray([np.nan, np.inf]))


class BoxPlotTests(unittest.TestCase):
    def setUp(self) -> None:
        self.data = np.asarray([1, 2, 3, 4, 5, 6, 7, 8, 9, 100], dtype=np.float64)

    def test_percentile_interpolates_linearly(self) -> None:
        self.assertEqual(percentile(np.asarray([1.0, 2.0, 3.0, 4.0]), 0.5), 2.5)
        self.assertEqual(percentile(np.asarray([3.0]), 0.25), 3.0)

    def test_iqr_outliers_and_whiskers(self) -> None:
        stats = compute_box_statistics(self.data)
        self.assertAlmostEqual(stats.q1, 3.25)
        self.assertAlmostEqual(stats.median, 5.5)
        self.assertAlmostEqual(stats.q3, 7.75)
        self.assertAlmostEqual(stats.iqr, 4.5)
        self.assertEqual(stats.outliers, (100.0,))
        self.assertEqual(stats.upper_whisker, 9.0)
        self.assertEqual(stats.lower_whisker, 1.0)

    def test_tukey_and_none_methods(self) -> None:
        tukey = compute_box_statistics(self.data, method=OutlierMethod.TUKEY)
        self.assertAlmostEqual(tukey.upper_fence, 7.75 + 3.0 * 4.5)
        self.assertEqual(tukey.outliers, (100.0,))
        none = compute_box_statistics(self.data, method="none")
        self.assertEqual(none.outliers, ())
        self.assertEqual(none.upper_whisker, 100.0)

    def test_ordering_invariant_holds(self) -> None:
        rng = np.random.default_rng(11)
        for _ in range(20):
            sample = rng.standard_cauchy(size=int(rng.integers(1, 40)))
            stats = compute_box_statistics(sample)
            self.assertLessEqual(stats.lower_whisker, stats.q1)
            self.assertLessEqual(stats.q1, stats.median)
            self.assertLessEqual(stats.median, stats.q3)
            self.assertLessEqual(stats.q3, stats.upper_whisker)

    def test_notch_brackets_median(self) -> None:
        stats = compute_box_statistics(self.data)
        self.assertLess(stats.notch_low, stats.median)
        self.assertGreater(stats.notch_high, stats.median)


class DensityTests(unittest.TestCase):
    def test_gaussian_density_integrates_to_one(self) -> None:
        rng = np.random.default_rng(5)
        result = kernel_density(rng.normal(size=500))
        self.assertEqual(result.grid.size, 200)
        self.assertAlmostEqual(_area(result.grid, result.density), 1.0, delta=0.05)
        self.assertTrue(np.all(result.density >= 0))

    def test_scott_bandwidth(self) -> None:
        data = np.asarray([1.0, 2.0, 3.0, 4.0, 5.0])
        expected = 1.06 * float(np.std(data, ddof=1)) * 5 ** (-0.2)
        self.assertAlmostEqual(scott_bandwidth(data), expected)
        self.assertAlmostEqual(scott_bandwidth(np.asarray([5.0, 5.0, 5.0])), 0.5)
        self.assertEqual(scott_bandwidth(np.asarray([0.0])), 1.0)

    def test_compact_kernels_vanish_outside_support(self) -> None:
        for kernel in (Kernel.EPANECHNIKOV, Kernel.UNIFORM, Kernel.TRIANGULAR):
            result = kernel_density(np.asarray([0.0]), bandwidth=1.0, kernel=kernel, resolution=61)
            outside = np.abs(result.grid) > 1.0
            self.assertTrue(np.all(result.density[outside] == 0.0), kernel)
            self.assertGreater(float(result.density.max()), 0.0)

    def test_invalid_arguments(self) -> None:
        with self.assertRaises(ValueError):
            kernel_density(np.asarray([1.0, 2.0]), resolution=1)
        with self.assertRaises(ValueError):
            kernel_density(np.asarray([1.0, 2.0]), bandwidth=0.0)
        with self.assertRaises(ValueError):
            kernel_density(np.asarray([1.0, 2.0]), kernel="cosine")


if __name__ == "__main__":
    unittest.main()
