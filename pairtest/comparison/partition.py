"""Partitioning of a result table into resultsets.

A resultset gathers every row that agrees on the key columns (for example a
scheme name and its options). Within a resultset rows are grouped by the
nominal dataset column and each group is ordered by run number, so two
resultsets can be paired run by run on any dataset.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from pairtest.core.table import ResultTable
from pairtest.exceptions import ConfigurationError, DataIntegrityError

from .options import KeyColumnsSpec, as_column_range, resolve_column, resultset_label

logger = logging.getLogger(__name__)


@dataclass
class Resultset:
    """Rows produced by one result generator, grouped per dataset.

    Rows are referenced by their index in the source table. ``groups[d]`` is
    ``None`` when the generator has no results for dataset ``d``.
    """

    table: ResultTable
    template: int
    key_columns: tuple[int, ...]
    groups: list[list[int] | None] = field(default_factory=list)

    def matches(self, row: int) -> bool:
        """True if ``row`` equals the template on every key column."""
        return all(
            self.table.index_value(row, column) == self.table.index_value(self.template, column)
            for column in self.key_columns
        )

    def add(self, row: int, dataset: int) -> None:
        group = self.groups[dataset]
        if group is None:
            group = self.groups[dataset] = []
        group.append(row)

    def dataset(self, index: int) -> list[int] | None:
        return self.groups[index]

    def sort(self, run_column: int) -> None:
        """Order every dataset group by run number; equal runs keep table order."""
        for index, group in enumerate(self.groups):
            if group is not None:
                self.groups[index] = sorted(
                    group, key=lambda row: self.table.index_value(row, run_column)
                )

    @property
    def num_rows(self) -> int:
        return sum(len(group) for group in self.groups if group is not None)

    def label(self, strip_prefixes: Sequence[str] = ()) -> str:
        return resultset_label(self.table, self.template, self.key_columns, strip_prefixes)


@dataclass
class Partition:
    """Frozen outcome of :func:`partition`."""

    resultsets: list[Resultset]
    num_datasets: int
    dataset_column: int
    run_column: int
    key_columns: tuple[int, ...]

    @property
    def num_resultsets(self) -> int:
        return len(self.resultsets)


def partition(
    table: ResultTable | None,
    key_columns: KeyColumnsSpec,
    dataset_column: int | None = None,
    run_column: int | None = None,
) -> Partition:
    """Split ``table`` into resultsets keyed on ``key_columns``.

    Args:
        table: The result table to analyse.
        key_columns: Columns identifying a result generator, as range text
            (1-based, e.g. ``"1,3-5"``), a :class:`ColumnRange` or 0-based indices.
        dataset_column: 0-based dataset column; ``None``/-1 selects the last column.
        run_column: 0-based run column; ``None``/-1 selects the last column.

    Returns:
        Partition whose resultsets are in first-seen order.

    Raises:
        ConfigurationError: No table or key columns, or the dataset column is
            not nominal.
        DataIntegrityError: A row misses its dataset, run or key value.
    """
    if table is None:
        raise ConfigurationError("No result table has been set")
    dataset_column = resolve_column(dataset_column, table, "Dataset")
    run_column = resolve_column(run_column, table, "Run")

    dataset_attr = table.column(dataset_column)
    if not dataset_attr.is_nominal:
        raise ConfigurationError(
            f"Dataset column {dataset_column + 1} ({dataset_attr.name}) is not nominal"
        )

    column_range = as_column_range(key_columns)
    if column_range.is_empty:
        raise ConfigurationError("No result specifier columns have been set")
    column_range.set_upper(table.num_columns - 1)
    keys = tuple(column_range.selection())
    if not keys:
        raise ConfigurationError(
            f"Key columns '{column_range.ranges}' select no column of the table"
        )

    num_datasets = dataset_attr.num_values
    resultsets: list[Resultset] = []
    by_key: dict[tuple[float | None, ...], Resultset] = {}

    for row in range(table.num_rows):
        _check_required(table, row, dataset_column, run_column, keys)
        key = tuple(table.index_value(row, column) for column in keys)
        resultset = by_key.get(key)
        if resultset is None:
            resultset = Resultset(
                table=table,
                template=row,
                key_columns=keys,
                groups=[None] * num_datasets,
            )
            by_key[key] = resultset
            resultsets.append(resultset)
        resultset.add(row, int(table.index_value(row, dataset_column)))

    for resultset in resultsets:
        resultset.sort(run_column)

    logger.debug(
        "Partitioned %d rows into %d resultsets over %d datasets (key columns %s)",
        table.num_rows,
        len(resultsets),
        num_datasets,
        [column + 1 for column in keys],
    )
    return Partition(
        resultsets=resultsets,
        num_datasets=num_datasets,
        dataset_column=dataset_column,
        run_column=run_column,
        key_columns=keys,
    )


def _check_required(
    table: ResultTable,
    row: int,
    dataset_column: int,
    run_column: int,
    keys: Sequence[int],
) -> None:
    if table.is_missing(row, dataset_column):
        raise DataIntegrityError(
            f"Row {row + 1} has a missing value in the dataset column:\n"
            f"{table.format_row(row)}"
        )
    if table.is_missing(row, run_column):
        raise DataIntegrityError(
            f"Row {row + 1} has a missing value in the run column:\n"
            f"{table.format_row(row)}"
        )
    for column in keys:
        if table.is_missing(row, column):
            raise DataIntegrityError(
                f"Row {row + 1} has a missing value in resultset key column "
                f"{column + 1}:\n{table.format_row(row)}"
            )


__all__ = ["Partition", "Resultset", "partition"]
