"""In-memory result table consumed by the tester.

A result table is a flat, immutable grid of typed cells. Columns are either
nominal (an enumerated domain of strings) or numeric. Missing cells are
stored as ``None``; numeric NaN is normalised to missing on construction.
"""

from __future__ import annotations

import csv
import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from pairtest.exceptions import DatasetError

MISSING = None
_MISSING_TOKENS = frozenset({"", "?"})


class ColumnType(str, Enum):
    """Declared type of a result table column."""

    NOMINAL = "nominal"
    NUMERIC = "numeric"


@dataclass(frozen=True)
class Column:
    name: str
    type: ColumnType
    values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.type is ColumnType.NUMERIC and self.values:
            raise DatasetError(f"Numeric column '{self.name}' cannot declare values")
        if len(set(self.values)) != len(self.values):
            raise DatasetError(f"Nominal column '{self.name}' has duplicate values")

    @classmethod
    def nominal(cls, name: str, values: Iterable[str]) -> "Column":
        return cls(name=name, type=ColumnType.NOMINAL, values=tuple(values))

    @classmethod
    def numeric(cls, name: str) -> "Column":
        return cls(name=name, type=ColumnType.NUMERIC)

    @property
    def is_nominal(self) -> bool:
        return self.type is ColumnType.NOMINAL

    @property
    def is_numeric(self) -> bool:
        return self.type is ColumnType.NUMERIC

    @property
    def num_values(self) -> int:
        return len(self.values)

    def value(self, index: int) -> str:
        return self.values[index]

    def index_of_value(self, value: str) -> int:
        try:
            return self.values.index(value)
        except ValueError:
            raise DatasetError(
                f"Value '{value}' is not in the domain of nominal column "
                f"'{self.name}': {list(self.values)}"
            ) from None


class ResultTable:
    """Immutable table of experiment results.

    Cells are addressed by ``(row, column)``. For comparison purposes every
    non-missing cell has a numeric code (:meth:`index_value`): the float itself
    for numeric columns and the domain index for nominal ones.
    """

    def __init__(self, columns: Sequence[Column], rows: Iterable[Sequence[Any]]):
        if not columns:
            raise DatasetError("A result table needs at least one column")
        self._columns = tuple(columns)
        width = len(self._columns)
        cells: list[tuple[Any, ...]] = []
        codes: list[tuple[float | None, ...]] = []
        for row_number, row in enumerate(rows):
            if len(row) != width:
                raise DatasetError(
                    f"Row {row_number + 1} has {len(row)} values, expected {width}"
                )
            row_cells = []
            row_codes = []
            for column, raw in zip(self._columns, row):
                cell, code = _normalise_cell(column, raw)
                row_cells.append(cell)
                row_codes.append(code)
            cells.append(tuple(row_cells))
            codes.append(tuple(row_codes))
        self._rows = tuple(cells)
        self._codes = tuple(codes)

    @classmethod
    def from_records(
        cls,
        records: Sequence[Mapping[str, Any]],
        *,
        nominal: Sequence[str] = (),
        domains: Mapping[str, Sequence[str]] | None = None,
    ) -> "ResultTable":
        """Build a table from dict records.

        Columns appear in first-seen key order. A column is nominal when it is
        listed in ``nominal`` or ``domains``; its domain is the explicit one
        when given, otherwise the distinct values in first-seen order.
        """
        domains = dict(domains or {})
        names: list[str] = []
        for record in records:
            for name in record:
                if name not in names:
                    names.append(name)
        for name in list(nominal) + list(domains):
            if name not in names:
                names.append(name)

        columns = []
        for name in names:
            if name in domains:
                columns.append(Column.nominal(name, domains[name]))
            elif name in nominal:
                seen: dict[str, None] = {}
                for record in records:
                    value = record.get(name)
                    if value is not None:
                        seen.setdefault(str(value), None)
                columns.append(Column.nominal(name, seen))
            else:
                columns.append(Column.numeric(name))

        rows = [[record.get(name) for name in names] for record in records]
        return cls(columns, rows)

    @property
    def columns(self) -> tuple[Column, ...]:
        return self._columns

    @property
    def num_columns(self) -> int:
        return len(self._columns)

    @property
    def num_rows(self) -> int:
        return len(self._rows)

    def column(self, index: int) -> Column:
        self._check_column(index)
        return self._columns[index]

    def row(self, index: int) -> tuple[Any, ...]:
        return self._rows[index]

    def is_missing(self, row: int, column: int) -> bool:
        return self._codes[row][column] is None

    def value(self, row: int, column: int) -> Any:
        return self._rows[row][column]

    def index_value(self, row: int, column: int) -> float | None:
        return self._codes[row][column]

    def format_value(self, row: int, column: int) -> str:
        cell = self._rows[row][column]
        if cell is None:
            return "?"
        if self._columns[column].is_numeric:
            return format_number(cell)
        return str(cell)

    def format_row(self, row: int) -> str:
        return ",".join(
            self.format_value(row, column) for column in range(self.num_columns)
        )

    def _check_column(self, index: int) -> None:
        if not 0 <= index < len(self._columns):
            raise IndexError(
                f"Column index {index} out of range for {len(self._columns)} columns"
            )

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"ResultTable(columns={self.num_columns}, rows={self.num_rows})"


def format_number(value: float) -> str:
    """Render a number with up to six decimals and no trailing zeros."""
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def read_csv(path: str | Path) -> ResultTable:
    """Load a CSV file with a header row into a :class:`ResultTable`.

    A column is numeric when every non-missing cell parses as a float.
    Empty cells and ``?`` are missing values.
    """
    path = Path(path)
    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.reader(handle)
        try:
            header = next(reader)
        except StopIteration:
            raise DatasetError(f"CSV file is empty: {path}") from None
        raw_rows = [row for row in reader if row]

    width = len(header)
    for line_number, row in enumerate(raw_rows, start=2):
        if len(row) != width:
            raise DatasetError(
                f"{path}:{line_number}: expected {width} values, got {len(row)}"
            )

    columns: list[Column] = []
    for index, name in enumerate(header):
        cells = [row[index].strip() for row in raw_rows]
        present = [cell for cell in cells if cell not in _MISSING_TOKENS]
        if present and all(_is_float(cell) for cell in present):
            columns.append(Column.numeric(name.strip()))
        else:
            columns.append(Column.nominal(name.strip(), dict.fromkeys(present)))

    rows = []
    for row in raw_rows:
        converted: list[Any] = []
        for column, raw in zip(columns, row):
            cell = raw.strip()
            if cell in _MISSING_TOKENS:
                converted.append(MISSING)
            elif column.is_numeric:
                converted.append(float(cell))
            else:
                converted.append(cell)
        rows.append(converted)
    return ResultTable(columns, rows)


def _normalise_cell(column: Column, raw: Any) -> tuple[Any, float | None]:
    if raw is None:
        return MISSING, None
    if column.is_numeric:
        try:
            number = float(raw)
        except (TypeError, ValueError):
            raise DatasetError(
                f"Non-numeric value {raw!r} in numeric column '{column.name}'"
            ) from None
        if math.isnan(number):
            return MISSING, None
        return number, number
    text = str(raw)
    return text, float(column.index_of_value(text))


def _is_float(text: str) -> bool:
    try:
        float(text)
    except ValueError:
        return False
    return True


__all__ = [
    "MISSING",
    "ColumnType",
    "Column",
    "ResultTable",
    "format_number",
    "read_csv",
]
