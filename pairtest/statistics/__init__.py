"""Statistics used to compare two aligned samples.

The tester only depends on the :class:`PairedComparison` protocol; the
default :class:`PairedStats` implements a paired t-test.
"""

from __future__ import annotations

from .descriptive import DescriptiveStats
from .distributions import t_to_p_value
from .paired import (
    PairedComparison,
    PairedStats,
    PairedStatsFactory,
    validate_significance_level,
)

__all__ = [
    "DescriptiveStats",
    "PairedComparison",
    "PairedStats",
    "PairedStatsFactory",
    "t_to_p_value",
    "validate_significance_level",
]
