"""Running descriptive statistics."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class DescriptiveStats:
    """Accumulates values and derives count, mean and sample deviation.

    Call :meth:`calculate_derived` after the last :meth:`add`. ``std_dev`` is
    NaN until at least two values have been seen.
    """

    count: int = 0
    sum: float = 0.0
    sum_sq: float = 0.0
    min: float = math.nan
    max: float = math.nan
    mean: float = math.nan
    std_dev: float = math.nan

    def add(self, value: float) -> None:
        self.count += 1
        self.sum += value
        self.sum_sq += value * value
        if math.isnan(self.min) or value < self.min:
            self.min = value
        if math.isnan(self.max) or value > self.max:
            self.max = value

    def calculate_derived(self) -> None:
        self.mean = math.nan
        self.std_dev = math.nan
        if self.count > 0:
            self.mean = self.sum / self.count
        if self.count > 1:
            variance = (self.sum_sq - self.sum * self.mean) / (self.count - 1)
            # Cancellation can push a zero variance slightly negative
            self.std_dev = math.sqrt(max(variance, 0.0))

    @property
    def variance(self) -> float:
        return self.std_dev * self.std_dev

    def to_dict(self) -> dict[str, float]:
        return {
            "count": self.count,
            "mean": self.mean,
            "std_dev": self.std_dev,
            "min": self.min,
            "max": self.max,
        }


__all__ = ["DescriptiveStats"]
