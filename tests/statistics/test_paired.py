"""Tests for the paired t-test service."""

from __future__ import annotations

import math
import statistics

import pytest
from scipy import stats as scipy_stats

from pairtest.exceptions import ConfigurationError
from pairtest.statistics import DescriptiveStats, PairedStats, t_to_p_value


def _paired(xs, ys, level=0.05) -> PairedStats:
    stats = PairedStats(level)
    for x, y in zip(xs, ys):
        stats.add(x, y)
    stats.calculate_derived()
    return stats


class TestDescriptiveStats:
    def test_matches_statistics_module(self):
        values = [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]
        stats = DescriptiveStats()
        for value in values:
            stats.add(value)
        stats.calculate_derived()

        assert stats.count == 8
        assert stats.mean == pytest.approx(statistics.mean(values))
        assert stats.std_dev == pytest.approx(statistics.stdev(values))
        assert stats.min == 2.0
        assert stats.max == 9.0

    def test_single_value_has_no_deviation(self):
        stats = DescriptiveStats()
        stats.add(3.0)
        stats.calculate_derived()

        assert stats.mean == 3.0
        assert math.isnan(stats.std_dev)

    def test_empty_stats_are_nan(self):
        stats = DescriptiveStats()
        stats.calculate_derived()

        assert math.isnan(stats.mean)


class TestPairedStats:
    def test_identical_samples_are_never_significant(self):
        stats = _paired([0.8, 0.82, 0.81], [0.8, 0.82, 0.81])

        assert stats.count == 3
        assert stats.differences_probability == 1.0
        assert stats.differences_significance == 0
        assert stats.mean_difference == 0.0

    def test_first_significantly_lower_is_negative(self):
        stats = _paired([0.50, 0.52, 0.51], [0.80, 0.83, 0.81])

        assert stats.differences_significance == -1
        assert stats.x_stats.mean == pytest.approx(0.51)
        assert stats.y_stats.mean == pytest.approx(0.8133333, rel=1e-6)
        assert stats.differences_t < 0

    def test_swapping_sides_mirrors_the_result(self):
        forward = _paired([0.50, 0.52, 0.51], [0.80, 0.83, 0.81])
        backward = _paired([0.80, 0.83, 0.81], [0.50, 0.52, 0.51])

        assert backward.differences_significance == -forward.differences_significance
        assert backward.differences_probability == forward.differences_probability
        assert backward.x_stats.mean == forward.y_stats.mean
        assert backward.y_stats.mean == forward.x_stats.mean

    def test_constant_shift_is_significant(self):
        stats = _paired([2.0, 3.0, 4.0], [1.0, 2.0, 3.0])

        assert stats.differences_probability == 0.0
        assert stats.differences_significance == 1

    def test_noisy_difference_is_not_significant(self):
        stats = _paired([1.0, 2.0, 3.0, 4.0], [1.5, 1.5, 3.5, 3.5])

        assert stats.differences_significance == 0

    def test_single_pair_is_not_significant(self):
        stats = _paired([1.0], [5.0])

        assert stats.count == 1
        assert stats.differences_probability == 1.0
        assert stats.differences_significance == 0

    def test_probability_matches_scipy_ttest_rel(self):
        xs = [0.71, 0.74, 0.69, 0.77, 0.73, 0.70]
        ys = [0.69, 0.70, 0.70, 0.72, 0.70, 0.66]
        stats = _paired(xs, ys)
        expected = scipy_stats.ttest_rel(xs, ys)

        assert stats.differences_t == pytest.approx(expected.statistic)
        assert stats.differences_probability == pytest.approx(expected.pvalue)

    def test_small_scale_values_use_the_t_test(self):
        xs = [1e-6 + 3e-7, 1e-6 - 2e-7, 1e-6 + 1e-7]
        ys = [1e-6, 1e-6, 1e-6]
        stats = _paired(xs, ys)
        expected = scipy_stats.ttest_rel(xs, ys)

        assert stats.differences_probability == pytest.approx(expected.pvalue)
        assert stats.differences_significance == 0

    def test_small_scale_shift_is_significant(self):
        xs = [2e-7, 3e-7, 4e-7]
        ys = [1e-7, 2e-7, 3e-7]
        stats = _paired(xs, ys)

        assert stats.differences_probability < 0.05
        assert stats.differences_significance == 1

    def test_significance_level_is_respected(self):
        xs = [0.71, 0.74, 0.69, 0.77, 0.73, 0.70]
        ys = [0.69, 0.70, 0.70, 0.72, 0.70, 0.66]
        p_value = scipy_stats.ttest_rel(xs, ys).pvalue

        loose = _paired(xs, ys, level=min(0.99, p_value * 2))
        strict = _paired(xs, ys, level=p_value / 2)

        assert loose.differences_significance == 1
        assert strict.differences_significance == 0

    @pytest.mark.parametrize("level", [0.0, 1.0, -0.1, 1.5])
    def test_invalid_significance_level(self, level):
        with pytest.raises(ConfigurationError, match="Significance level"):
            PairedStats(level)

    def test_to_dict_contains_outcome(self):
        stats = _paired([0.50, 0.52, 0.51], [0.80, 0.83, 0.81])
        data = stats.to_dict()

        assert data["count"] == 3
        assert data["significance"] == -1
        assert data["x"]["mean"] == pytest.approx(0.51)


def test_t_to_p_value_edges():
    assert t_to_p_value(0.0, 5) == pytest.approx(1.0)
    assert t_to_p_value(3.0, 0) == 1.0
    assert t_to_p_value(float("inf"), 4) == 0.0
    assert t_to_p_value(-2.0, 10) == pytest.approx(t_to_p_value(2.0, 10))
