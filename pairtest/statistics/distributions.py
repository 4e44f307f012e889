"""Distribution helpers backed by SciPy."""

from __future__ import annotations

import math

from scipy import stats as scipy_stats


def t_to_p_value(t_stat: float, df: int) -> float:
    """Two-tailed p-value of a Student t statistic with ``df`` degrees of freedom."""
    if df < 1:
        return 1.0
    if math.isinf(t_stat):
        return 0.0
    return float(2.0 * scipy_stats.t.sf(abs(t_stat), df))


__all__ = ["t_to_p_value"]
