"""Property-based tests for resultset partitioning."""

from hypothesis import given, settings, strategies as st

from pairtest.comparison import partition
from tests.factories import DATASET, RUN, make_table

rows_strategy = st.lists(
    st.tuples(
        st.sampled_from(["d1", "d2", "d3"]),
        st.sampled_from(["A", "B", "C"]),
        st.integers(min_value=1, max_value=5),
        st.floats(min_value=0, max_value=1, allow_nan=False),
        st.just(1.0),
    ),
    min_size=1,
    max_size=40,
)


@settings(deadline=500, max_examples=50)
@given(rows=rows_strategy)
def test_every_row_lands_in_exactly_one_group(rows):
    table = make_table(rows, datasets=["d1", "d2", "d3"])

    result = partition(table, "2", DATASET, RUN)

    placed = sorted(
        row
        for resultset in result.resultsets
        for group in resultset.groups
        if group is not None
        for row in group
    )
    assert placed == list(range(len(rows)))
    for resultset in result.resultsets:
        for dataset, group in enumerate(resultset.groups):
            for row in group or []:
                assert resultset.matches(row)
                assert table.index_value(row, DATASET) == dataset


@settings(deadline=500, max_examples=50)
@given(rows=rows_strategy)
def test_groups_are_ordered_by_run(rows):
    table = make_table(rows, datasets=["d1", "d2", "d3"])

    result = partition(table, "2", DATASET, RUN)

    for resultset in result.resultsets:
        for group in resultset.groups:
            if group is None:
                continue
            runs = [table.value(row, RUN) for row in group]
            assert runs == sorted(runs)


@settings(deadline=500, max_examples=50)
@given(rows=rows_strategy)
def test_partition_is_deterministic(rows):
    table = make_table(rows, datasets=["d1", "d2", "d3"])

    first = partition(table, "2", DATASET, RUN)
    second = partition(table, "2", DATASET, RUN)

    assert [rs.template for rs in first.resultsets] == [
        rs.template for rs in second.resultsets
    ]
    assert [rs.groups for rs in first.resultsets] == [
        rs.groups for rs in second.resultsets
    ]
    names = [table.value(rs.template, 1) for rs in first.resultsets]
    assert names == list(dict.fromkeys(row[1] for row in rows))
