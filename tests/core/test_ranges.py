"""Tests for column range expressions."""

from __future__ import annotations

import pytest

from pairtest.core import ColumnRange
from pairtest.exceptions import ConfigurationError


def _select(text: str, upper: int) -> list[int]:
    column_range = ColumnRange(text)
    column_range.set_upper(upper)
    return column_range.selection()


@pytest.mark.parametrize(
    "text,upper,expected",
    [
        ("1,3-5", 5, [0, 2, 3, 4]),
        ("first-last", 3, [0, 1, 2, 3]),
        ("last", 4, [4]),
        ("first,last", 4, [0, 4]),
        ("5-3", 5, [2, 3, 4]),
        ("2,2,1-2", 3, [0, 1]),
        ("!1", 2, [1, 2]),
        ("!2-last", 4, [0]),
    ],
)
def test_selection(text, upper, expected):
    assert _select(text, upper) == expected


def test_indices_beyond_upper_are_clipped():
    assert _select("2,8", 3) == [1]
    assert _select("3-9", 4) == [2, 3, 4]


def test_empty_range():
    column_range = ColumnRange("")

    assert column_range.is_empty
    column_range.set_upper(3)
    assert column_range.selection() == []


@pytest.mark.parametrize("text", ["a", "0", "1-", "-2", "1-x", "1.5"])
def test_malformed_items_raise(text):
    with pytest.raises(ConfigurationError, match="Invalid range item"):
        ColumnRange(text)


def test_selection_requires_upper():
    with pytest.raises(ConfigurationError, match="upper limit"):
        ColumnRange("1").selection()


def test_ranges_text_is_normalised():
    assert ColumnRange(" 1 , 3-5 ").ranges == "1,3-5"
    assert ColumnRange("!first-2").ranges == "!first-2"


def test_from_indices_uses_one_based_text():
    column_range = ColumnRange.from_indices([0, 2])

    assert column_range.ranges == "1,3"
    assert column_range == ColumnRange("1,3")


def test_from_indices_rejects_negative():
    with pytest.raises(ConfigurationError):
        ColumnRange.from_indices([-1])
