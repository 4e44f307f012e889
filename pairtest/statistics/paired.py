"""Paired-difference statistics between two aligned samples."""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Protocol

from pairtest.exceptions import ConfigurationError

from .descriptive import DescriptiveStats
from .distributions import t_to_p_value

# Spread at or below this fraction of the largest difference is rounding noise
_RELATIVE_SPREAD = 1e-12


class PairedComparison(Protocol):
    """Service that tests paired values for a significant difference.

    ``differences_significance`` is -1 when the first sample is significantly
    lower, +1 when it is significantly higher and 0 otherwise.
    """

    count: int
    x_stats: DescriptiveStats
    y_stats: DescriptiveStats
    differences_stats: DescriptiveStats
    differences_significance: int

    def add(self, value1: float, value2: float) -> None:  # pragma: no cover - protocol
        ...

    def calculate_derived(self) -> None:  # pragma: no cover - protocol
        ...


PairedStatsFactory = Callable[[float], PairedComparison]


def validate_significance_level(level: float) -> float:
    if not 0.0 < level < 1.0:
        raise ConfigurationError(
            f"Significance level must be in (0, 1), got {level!r}"
        )
    return float(level)


class PairedStats:
    """Paired t-test over ``(x, y)`` value pairs.

    Args:
        significance_level: Two-tailed threshold on the p-value of the mean
            difference ``x - y``.

    When the differences have no spread the test degenerates: identical
    samples are never significant, a constant non-zero shift always is.
    """

    def __init__(self, significance_level: float = 0.05):
        self.significance_level = validate_significance_level(significance_level)
        self.x_stats = DescriptiveStats()
        self.y_stats = DescriptiveStats()
        self.differences_stats = DescriptiveStats()
        self.count = 0
        self.xy_sum = 0.0
        self.correlation = math.nan
        self.differences_t = math.nan
        self.differences_probability = 1.0
        self.differences_significance = 0

    def add(self, value1: float, value2: float) -> None:
        self.x_stats.add(value1)
        self.y_stats.add(value2)
        self.differences_stats.add(value1 - value2)
        self.xy_sum += value1 * value2
        self.count += 1

    def calculate_derived(self) -> None:
        self.x_stats.calculate_derived()
        self.y_stats.calculate_derived()
        self.differences_stats.calculate_derived()
        self.correlation = self._correlation()

        diffs = self.differences_stats
        self.differences_t = math.nan
        if self.count < 2:
            self.differences_probability = 1.0
        elif diffs.std_dev > _RELATIVE_SPREAD * max(abs(diffs.min), abs(diffs.max)):
            self.differences_t = diffs.mean * math.sqrt(self.count) / diffs.std_dev
            self.differences_probability = t_to_p_value(
                self.differences_t, self.count - 1
            )
        elif diffs.sum_sq == 0.0:
            self.differences_probability = 1.0
        else:
            self.differences_probability = 0.0

        self.differences_significance = 0
        if diffs.mean != 0.0 and self.differences_probability <= self.significance_level:
            # Sign of the mean difference keeps (x, y) and (y, x) exact mirrors
            self.differences_significance = 1 if diffs.mean > 0 else -1

    @property
    def mean_difference(self) -> float:
        return self.differences_stats.mean

    def _correlation(self) -> float:
        x, y = self.x_stats, self.y_stats
        if math.isnan(x.std_dev) or math.isnan(y.std_dev) or x.std_dev == 0.0:
            return math.nan
        slope = (self.xy_sum - x.sum * y.sum / self.count) / (x.sum_sq - x.sum * x.mean)
        if y.std_dev == 0.0:
            return 1.0
        return slope * x.std_dev / y.std_dev

    def to_dict(self) -> dict[str, object]:
        return {
            "count": self.count,
            "x": self.x_stats.to_dict(),
            "y": self.y_stats.to_dict(),
            "mean_difference": self.mean_difference,
            "t_statistic": self.differences_t,
            "p_value": self.differences_probability,
            "significance": self.differences_significance,
            "correlation": self.correlation,
        }

    def __str__(self) -> str:
        sig = {-1: "x < y", 0: "not significant", 1: "x > y"}[
            self.differences_significance
        ]
        return (
            f"paired t-test (n={self.count}): mean x={self.x_stats.mean:.4f}, "
            f"mean y={self.y_stats.mean:.4f}, p={self.differences_probability:.4f} ({sig})"
        )


__all__ = [
    "PairedComparison",
    "PairedStats",
    "PairedStatsFactory",
    "validate_significance_level",
]
