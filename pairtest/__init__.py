"""pairtest - paired significance testing of experiment results.

The primary interface is the :class:`PairedTester`:

    from pairtest import PairedTester, read_csv

    tester = PairedTester(read_csv("results.csv"), key_columns="3,4")
    print(tester.multi_resultset_summary(comparison_column=5))

Submodules:
    - pairtest.core - result table and column ranges
    - pairtest.statistics - paired t-test service
    - pairtest.comparison - partitioning, comparison and reports
    - pairtest.config - configuration schema and loader
"""

from pairtest._version import __version__
from pairtest.comparison import PairedTester, partition
from pairtest.core import Column, ColumnRange, ColumnType, ResultTable, read_csv
from pairtest.exceptions import (
    ConfigurationError,
    DataIntegrityError,
    DatasetError,
    PairtestError,
    RunAlignmentWarning,
)
from pairtest.statistics import PairedStats


def __getattr__(name: str):
    """Lazy-load submodules on first access."""
    import importlib

    _LAZY_SUBMODULES = {"cli", "config", "utils"}
    if name in _LAZY_SUBMODULES:
        return importlib.import_module(f"pairtest.{name}")
    raise AttributeError(f"module 'pairtest' has no attribute {name!r}")


__all__ = [
    # Main API
    "PairedTester",
    "partition",
    "PairedStats",
    # Tables
    "Column",
    "ColumnRange",
    "ColumnType",
    "ResultTable",
    "read_csv",
    # Exceptions
    "PairtestError",
    "ConfigurationError",
    "DatasetError",
    "DataIntegrityError",
    "RunAlignmentWarning",
    # Submodules (lazy)
    "cli",
    "config",
    "utils",
    # Version
    "__version__",
]
