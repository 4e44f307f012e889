"""Paired comparison of result generators across datasets and runs.

The :class:`PairedTester` partitions a result table into resultsets, runs
paired significance tests between any two of them on a dataset, and folds
all pairs and datasets into win matrices, rankings and per-base tables.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Sequence
from datetime import datetime

from pairtest.config.schema import DEFAULT_STRIP_PREFIXES, TesterConfig
from pairtest.core.ranges import ColumnRange
from pairtest.core.table import Column, ResultTable
from pairtest.exceptions import (
    ConfigurationError,
    DataIntegrityError,
    PairtestError,
    RunAlignmentWarning,
)
from pairtest.statistics import (
    PairedComparison,
    PairedStats,
    PairedStatsFactory,
    validate_significance_level,
)

from . import reports
from .options import LAST_COLUMN, KeyColumnsSpec, as_column_range
from .partition import Partition, Resultset, partition

logger = logging.getLogger(__name__)


class PairedTester:
    """Compare resultsets of a result table with paired significance tests.

    The partition of the table into resultsets is cached and rebuilt lazily
    whenever the table, the key columns or the dataset/run columns change.
    An instance is meant to be owned by one comparison session; configuration
    changes must not overlap with reads from another thread.

    Args:
        table: The result table to analyse.
        key_columns: Columns identifying a result generator (1-based range
            text, :class:`ColumnRange` or 0-based indices).
        dataset_column: 0-based dataset column, -1 for the last column.
        run_column: 0-based run column, -1 for the last column.
        significance_level: Two-tailed level for every paired test.
        strip_prefixes: Label prefixes removed for readability.
        stats_factory: Builds the paired test for a significance level.
    """

    def __init__(
        self,
        table: ResultTable | None = None,
        *,
        key_columns: KeyColumnsSpec = None,
        dataset_column: int = LAST_COLUMN,
        run_column: int = LAST_COLUMN,
        significance_level: float = 0.05,
        strip_prefixes: Sequence[str] = DEFAULT_STRIP_PREFIXES,
        stats_factory: PairedStatsFactory = PairedStats,
    ):
        self._table = table
        self._key_columns = as_column_range(key_columns)
        self._dataset_column = dataset_column
        self._run_column = run_column
        self._significance_level = validate_significance_level(significance_level)
        self._strip_prefixes = tuple(strip_prefixes)
        self._stats_factory = stats_factory
        self._partition: Partition | None = None

    @classmethod
    def from_config(
        cls,
        config: TesterConfig,
        table: ResultTable | None = None,
        *,
        stats_factory: PairedStatsFactory = PairedStats,
    ) -> "PairedTester":
        return cls(
            table,
            key_columns=config.key_columns,
            dataset_column=config.dataset_column,
            run_column=config.run_column,
            significance_level=config.significance_level,
            strip_prefixes=config.strip_prefixes,
            stats_factory=stats_factory,
        )

    def options(self) -> TesterConfig:
        """Current settings as a :class:`TesterConfig`."""
        return TesterConfig(
            dataset_column=self._dataset_column,
            run_column=self._run_column,
            key_columns=self._key_columns.ranges,
            significance_level=self._significance_level,
            strip_prefixes=list(self._strip_prefixes),
        )

    # -- configuration ---------------------------------------------------

    @property
    def table(self) -> ResultTable | None:
        return self._table

    @table.setter
    def table(self, table: ResultTable | None) -> None:
        self._table = table
        self.invalidate()

    @property
    def key_columns(self) -> ColumnRange:
        return self._key_columns

    @key_columns.setter
    def key_columns(self, spec: KeyColumnsSpec) -> None:
        self._key_columns = as_column_range(spec)
        self.invalidate()

    @property
    def dataset_column(self) -> int:
        return self._dataset_column

    @dataset_column.setter
    def dataset_column(self, index: int | None) -> None:
        self._dataset_column = LAST_COLUMN if index is None else index
        self.invalidate()

    @property
    def run_column(self) -> int:
        return self._run_column

    @run_column.setter
    def run_column(self, index: int | None) -> None:
        self._run_column = LAST_COLUMN if index is None else index
        self.invalidate()

    @property
    def significance_level(self) -> float:
        return self._significance_level

    @significance_level.setter
    def significance_level(self, level: float) -> None:
        self._significance_level = validate_significance_level(level)

    @property
    def strip_prefixes(self) -> tuple[str, ...]:
        return self._strip_prefixes

    @strip_prefixes.setter
    def strip_prefixes(self, prefixes: Sequence[str]) -> None:
        self._strip_prefixes = tuple(prefixes)

    @property
    def is_valid(self) -> bool:
        """True while the cached partition matches the configuration."""
        return self._partition is not None

    def invalidate(self) -> None:
        self._partition = None

    def prepare(self) -> Partition:
        """Return the partition, rebuilding it if the configuration changed."""
        if self._partition is None:
            # The range object is bound to the table width, keep the caller's copy untouched
            self._partition = partition(
                self._table,
                ColumnRange(self._key_columns.ranges),
                self._dataset_column,
                self._run_column,
            )
        return self._partition

    def _try_prepare(self) -> Partition | None:
        try:
            return self.prepare()
        except PairtestError as exc:
            logger.debug("Resultsets unavailable: %s", exc)
            return None

    # -- tolerant accessors ----------------------------------------------

    @property
    def num_datasets(self) -> int:
        prepared = self._try_prepare()
        return 0 if prepared is None else prepared.num_datasets

    @property
    def num_resultsets(self) -> int:
        prepared = self._try_prepare()
        return 0 if prepared is None else prepared.num_resultsets

    def resultset_name(self, index: int) -> str | None:
        prepared = self._try_prepare()
        if prepared is None:
            return None
        return self._resultset(prepared, index).label(self._strip_prefixes)

    def resultset_names(self) -> list[str]:
        prepared = self._try_prepare()
        if prepared is None:
            return []
        return [resultset.label(self._strip_prefixes) for resultset in prepared.resultsets]

    def dataset_name(self, index: int) -> str:
        prepared = self.prepare()
        return self._table.column(prepared.dataset_column).value(index)

    def resultset_key(self) -> str:
        """Legend mapping resultset numbers to their labels."""
        try:
            self.prepare()
        except PairtestError as exc:
            return str(exc)
        return reports.render_legend(self.resultset_names())

    def header(self, comparison_column: int) -> str:
        """Report preamble: analysed column, counts and significance level."""
        try:
            self.prepare()
            column = self._comparison_column(comparison_column)
        except PairtestError as exc:
            return str(exc)
        return reports.render_header(
            column.name,
            self.num_datasets,
            self.num_resultsets,
            self._significance_level,
            _timestamp(),
        )

    # -- paired comparison -----------------------------------------------

    def calculate_statistics(
        self,
        dataset: int,
        first: int,
        second: int,
        comparison_column: int,
    ) -> PairedComparison:
        """Paired test of two resultsets on one dataset.

        Rows are paired by position after both groups were sorted by run
        number. A run-number mismatch at the same position only warns.

        Raises:
            DataIntegrityError: The column is not numeric, a resultset has no
                results for the dataset, the groups differ in size, or a
                paired row misses its value.
        """
        self._check_comparison_column(comparison_column)
        prepared = self.prepare()
        if not 0 <= dataset < prepared.num_datasets:
            raise ConfigurationError(
                f"Dataset index {dataset} out of range for {prepared.num_datasets} datasets"
            )
        resultset1 = self._resultset(prepared, first)
        resultset2 = self._resultset(prepared, second)
        rows1 = resultset1.dataset(dataset)
        rows2 = resultset2.dataset(dataset)
        dataset_name = self.dataset_name(dataset)

        if not rows1:
            raise DataIntegrityError(
                f"No results for dataset={dataset_name} for "
                f"resultset={resultset1.label(self._strip_prefixes)}"
            )
        if not rows2:
            raise DataIntegrityError(
                f"No results for dataset={dataset_name} for "
                f"resultset={resultset2.label(self._strip_prefixes)}"
            )
        if len(rows1) != len(rows2):
            raise DataIntegrityError(
                f"Results for dataset={dataset_name} differ in size for "
                f"resultset={resultset1.label(self._strip_prefixes)} ({len(rows1)} rows) "
                f"and resultset={resultset2.label(self._strip_prefixes)} ({len(rows2)} rows)"
            )

        table = self._table
        run_column = prepared.run_column
        stats = self._stats_factory(self._significance_level)
        for row1, row2 in zip(rows1, rows2):
            for row in (row1, row2):
                if table.is_missing(row, comparison_column):
                    raise DataIntegrityError(
                        f"Row {row + 1} has a missing value in comparison column "
                        f"{comparison_column + 1} (dataset={dataset_name}):\n"
                        f"{table.format_row(row)}"
                    )
            if table.index_value(row1, run_column) != table.index_value(row2, run_column):
                warnings.warn(
                    f"Run numbers do not match for dataset={dataset_name}:\n"
                    f"{table.format_row(row1)}\n{table.format_row(row2)}",
                    RunAlignmentWarning,
                    stacklevel=2,
                )
            stats.add(
                table.value(row1, comparison_column),
                table.value(row2, comparison_column),
            )
        stats.calculate_derived()
        return stats

    # -- aggregates ------------------------------------------------------

    def multi_resultset_wins(self, comparison_column: int) -> reports.WinMatrix:
        """Count, for every pair of resultsets, the datasets one wins significantly.

        ``counts[i][j]`` is the number of datasets where resultset ``j`` is
        significantly higher than resultset ``i``. A dataset whose comparison
        fails is logged, recorded in ``skipped`` and left out.
        """
        self._check_comparison_column(comparison_column)
        prepared = self.prepare()
        n = prepared.num_resultsets
        datasets = [self.dataset_name(index) for index in range(prepared.num_datasets)]
        counts = [[0] * n for _ in range(n)]
        skipped: list[reports.SkippedComparison] = []

        for i in range(n):
            for j in range(i + 1, n):
                logger.debug("Comparing (%d) with (%d)", i + 1, j + 1)
                for dataset, name in enumerate(datasets):
                    try:
                        stats = self.calculate_statistics(dataset, i, j, comparison_column)
                    except DataIntegrityError as exc:
                        logger.warning("Skipped dataset %s: %s", name, exc)
                        skipped.append(reports.SkippedComparison(name, i, j, str(exc)))
                        continue
                    if stats.differences_significance < 0:
                        counts[i][j] += 1
                    elif stats.differences_significance > 0:
                        counts[j][i] += 1

        return reports.WinMatrix(
            labels=self.resultset_names(),
            datasets=datasets,
            counts=counts,
            skipped=skipped,
        )

    def multi_resultset_summary(self, comparison_column: int) -> str:
        """Win matrix rendered as a lettered grid with a legend."""
        return self.multi_resultset_wins(comparison_column).to_text()

    def multi_resultset_ranking(self, comparison_column: int) -> reports.Ranking:
        """Resultsets ordered by net significant wins."""
        return self.multi_resultset_wins(comparison_column).ranking()

    def multi_resultset_full(
        self, base: int, comparison_column: int
    ) -> reports.FullComparison:
        """Compare ``base`` against every other resultset on every dataset."""
        self._check_comparison_column(comparison_column)
        prepared = self.prepare()
        self._resultset(prepared, base)
        labels = self.resultset_names()
        others = [index for index in range(prepared.num_resultsets) if index != base]
        totals = {index: reports.WinTieLoss() for index in others}
        rows: list[reports.DatasetRow] = []
        skipped: list[str] = []
        failures: list[reports.SkippedComparison] = []

        for dataset in range(prepared.num_datasets):
            name = self.dataset_name(dataset)
            try:
                # The base against itself is never significant and yields its own stats
                own = self.calculate_statistics(dataset, base, base, comparison_column)
            except DataIntegrityError as exc:
                logger.warning("Skipped dataset %s: %s", name, exc)
                skipped.append(name)
                continue

            row = reports.DatasetRow(
                dataset=name, count=own.count, base_mean=own.x_stats.mean
            )
            for other in others:
                try:
                    stats = self.calculate_statistics(
                        dataset, base, other, comparison_column
                    )
                except DataIntegrityError as exc:
                    logger.warning("Skipped dataset %s for (%d): %s", name, other + 1, exc)
                    failures.append(reports.SkippedComparison(name, base, other, str(exc)))
                    row.cells[other] = None
                    continue
                if stats.differences_significance < 0:
                    marker = reports.SIGNIFICANTLY_HIGHER
                    totals[other].win += 1
                elif stats.differences_significance > 0:
                    marker = reports.SIGNIFICANTLY_LOWER
                    totals[other].loss += 1
                else:
                    marker = reports.NOT_SIGNIFICANT
                    totals[other].tie += 1
                row.cells[other] = reports.ComparisonCell(
                    mean=stats.y_stats.mean, marker=marker
                )
            rows.append(row)

        return reports.FullComparison(
            base=base,
            labels=labels,
            rows=rows,
            totals=totals,
            skipped=skipped,
            failures=failures,
        )

    def report(
        self,
        comparison_column: int,
        *,
        base: int | None = None,
        summary: bool = False,
        ranking: bool = False,
    ) -> reports.ComparisonReport:
        """Build a complete report for ``comparison_column``.

        With ``ranking`` or ``summary`` only those views are computed;
        otherwise full tables are built for ``base`` (every resultset when
        ``base`` is None).
        """
        self._check_comparison_column(comparison_column)
        prepared = self.prepare()
        result = reports.ComparisonReport(
            column=self._table.column(comparison_column).name,
            num_datasets=prepared.num_datasets,
            labels=self.resultset_names(),
            significance_level=self._significance_level,
            created_at=_timestamp(),
        )
        if ranking or summary:
            wins = self.multi_resultset_wins(comparison_column)
            if ranking:
                result.ranking = wins.ranking()
            if summary:
                result.summary = wins
            return result
        bases = range(prepared.num_resultsets) if base is None else [base]
        result.full = [self.multi_resultset_full(index, comparison_column) for index in bases]
        return result

    # -- helpers ---------------------------------------------------------

    def _comparison_column(self, comparison_column: int) -> Column:
        if self._table is None:
            raise ConfigurationError("No result table has been set")
        if not 0 <= comparison_column < self._table.num_columns:
            raise ConfigurationError(
                f"Comparison column {comparison_column + 1} is out of range "
                f"(table has {self._table.num_columns} columns)"
            )
        return self._table.column(comparison_column)

    def _check_comparison_column(self, comparison_column: int) -> None:
        column = self._comparison_column(comparison_column)
        if not column.is_numeric:
            raise DataIntegrityError(
                f"Comparison column {comparison_column + 1} ({column.name}) is not numeric"
            )

    @staticmethod
    def _resultset(prepared: Partition, index: int) -> Resultset:
        if not 0 <= index < prepared.num_resultsets:
            raise ConfigurationError(
                f"Resultset index {index} out of range for "
                f"{prepared.num_resultsets} resultsets"
            )
        return prepared.resultsets[index]


def _timestamp() -> str:
    return datetime.now().strftime("%d/%m/%y %H:%M")


__all__ = ["PairedTester"]
