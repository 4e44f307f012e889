"""Pairtest exception hierarchy.

All pairtest-specific exceptions inherit from PairtestError, allowing
callers to catch any pairtest error with a single except clause:

    try:
        summary = tester.multi_resultset_summary(column)
    except pairtest.PairtestError as e:
        handle_gracefully(e)

Each domain exception also inherits from its stdlib counterpart so
existing ``except ValueError:`` handlers continue to work.
"""

from __future__ import annotations


class PairtestError(Exception):
    """Base exception for all pairtest errors."""


class ConfigurationError(PairtestError, ValueError):
    """Invalid tester configuration (columns, ranges, significance level)."""


class DatasetError(PairtestError, ValueError):
    """Malformed result table."""


class DataIntegrityError(PairtestError, ValueError):
    """Result rows that cannot be compared (missing values, ragged groups)."""


class RunAlignmentWarning(UserWarning):
    """Two positionally paired rows carry different run numbers."""


__all__ = [
    "PairtestError",
    "ConfigurationError",
    "DatasetError",
    "DataIntegrityError",
    "RunAlignmentWarning",
]
