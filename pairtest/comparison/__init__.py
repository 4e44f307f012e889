"""Resultset partitioning, paired comparison and aggregate reports."""

from pairtest.comparison.options import (
    LAST_COLUMN,
    as_column_range,
    parse_column_option,
    resolve_column,
    resultset_label,
)
from pairtest.comparison.partition import Partition, Resultset, partition
from pairtest.comparison.reports import (
    ComparisonCell,
    ComparisonReport,
    DatasetRow,
    FullComparison,
    Ranking,
    RankingRow,
    SkippedComparison,
    WinMatrix,
    WinTieLoss,
    resultset_code,
)
from pairtest.comparison.tester import PairedTester

__all__ = [
    # Tester
    "PairedTester",
    # Partitioning
    "LAST_COLUMN",
    "Partition",
    "Resultset",
    "as_column_range",
    "parse_column_option",
    "partition",
    "resolve_column",
    "resultset_label",
    # Reports
    "ComparisonCell",
    "ComparisonReport",
    "DatasetRow",
    "FullComparison",
    "Ranking",
    "RankingRow",
    "SkippedComparison",
    "WinMatrix",
    "WinTieLoss",
    "resultset_code",
]
