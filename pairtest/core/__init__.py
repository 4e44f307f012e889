"""Result table and column range primitives."""

from pairtest.core.ranges import ColumnRange
from pairtest.core.table import (
    MISSING,
    Column,
    ColumnType,
    ResultTable,
    format_number,
    read_csv,
)

__all__ = [
    "MISSING",
    "Column",
    "ColumnRange",
    "ColumnType",
    "ResultTable",
    "format_number",
    "read_csv",
]
