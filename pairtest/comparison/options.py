"""Column selection and resultset naming helpers."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Union

from pairtest.core.ranges import ColumnRange
from pairtest.core.table import ResultTable
from pairtest.exceptions import ConfigurationError

LAST_COLUMN = -1

KeyColumnsSpec = Union[ColumnRange, str, Sequence[int], None]


def resolve_column(setting: int | None, table: ResultTable, role: str) -> int:
    """Resolve a configured column index against ``table``.

    ``None`` and ``LAST_COLUMN`` select the table's last column, so the choice
    follows schema changes until a concrete index is configured.
    """
    if setting is None or setting == LAST_COLUMN:
        return table.num_columns - 1
    if not 0 <= setting < table.num_columns:
        raise ConfigurationError(
            f"{role} column {setting + 1} is out of range "
            f"(table has {table.num_columns} columns)"
        )
    return setting


def parse_column_option(text: str | int | None) -> int:
    """Parse a 1-based column option (``first``/``last``/number) to a 0-based index."""
    if text is None:
        return LAST_COLUMN
    if isinstance(text, int):
        return text - 1 if text > 0 else LAST_COLUMN
    text = text.strip().lower()
    if text in ("", "last"):
        return LAST_COLUMN
    if text == "first":
        return 0
    try:
        index = int(text)
    except ValueError:
        raise ConfigurationError(
            f"Invalid column '{text}': expected 1-based index, 'first' or 'last'"
        ) from None
    if index < 1:
        raise ConfigurationError(f"Column numbers start at 1, got {index}")
    return index - 1


def as_column_range(spec: KeyColumnsSpec) -> ColumnRange:
    """Normalise range text, index lists or ranges to a :class:`ColumnRange`."""
    if spec is None:
        return ColumnRange()
    if isinstance(spec, ColumnRange):
        return spec
    if isinstance(spec, str):
        return ColumnRange(spec)
    return ColumnRange.from_indices(spec)


def resultset_label(
    table: ResultTable,
    template_row: int,
    key_columns: Sequence[int],
    strip_prefixes: Sequence[str] = (),
) -> str:
    """Describe a resultset by its template's key column values.

    The first matching prefix in ``strip_prefixes`` is removed, which keeps
    long package-qualified scheme names readable.
    """
    label = " ".join(table.format_value(template_row, column) for column in key_columns)
    for prefix in strip_prefixes:
        if prefix and label.startswith(prefix):
            label = label[len(prefix) :]
            break
    return label.strip()


__all__ = [
    "LAST_COLUMN",
    "KeyColumnsSpec",
    "as_column_range",
    "parse_column_option",
    "resolve_column",
    "resultset_label",
]
