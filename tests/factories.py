from __future__ import annotations

from collections.abc import Iterable, Sequence

from pairtest.comparison import PairedTester
from pairtest.core import ResultTable

COLUMNS = ("dataset", "scheme", "run", "accuracy", "time")
DATASET, SCHEME, RUN, ACCURACY, TIME = range(len(COLUMNS))


def make_table(
    rows: Iterable[Sequence[object]],
    *,
    datasets: Sequence[str] | None = None,
) -> ResultTable:
    """Build a table from ``(dataset, scheme, run, accuracy, time)`` tuples."""
    records = [dict(zip(COLUMNS, row)) for row in rows]
    domains = {"dataset": list(datasets)} if datasets is not None else {}
    return ResultTable.from_records(
        records, nominal=("dataset", "scheme"), domains=domains
    )


def make_tester(table: ResultTable, **kwargs) -> PairedTester:
    kwargs.setdefault("key_columns", "2")
    kwargs.setdefault("dataset_column", DATASET)
    kwargs.setdefault("run_column", RUN)
    return PairedTester(table, **kwargs)


def scenario_rows() -> list[tuple[object, ...]]:
    """A and B tie on d1; A is consistently lower than B on d2."""
    rows = []
    for run, value in enumerate([0.80, 0.82, 0.81], start=1):
        rows.append(("d1", "A", run, value, 1.0))
        rows.append(("d1", "B", run, value, 2.0))
    for run, (a, b) in enumerate([(0.50, 0.80), (0.52, 0.83), (0.51, 0.81)], start=1):
        rows.append(("d2", "A", run, a, 1.0))
        rows.append(("d2", "B", run, b, 2.0))
    return rows


def scenario_table() -> ResultTable:
    return make_table(scenario_rows(), datasets=["d1", "d2"])
