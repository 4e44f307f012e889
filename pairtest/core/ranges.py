"""Column range expressions such as ``"1,3-5"`` or ``"first-last"``."""

from __future__ import annotations

import re
from collections.abc import Iterable

from pairtest.exceptions import ConfigurationError

_SPAN = re.compile(r"^([^-]+)-([^-]+)$")


class ColumnRange:
    """A set of columns described by 1-based range text.

    Items are comma separated and may be a single index, ``first``, ``last``
    or a span ``a-b`` (either end may be ``first``/``last``). A leading ``!``
    inverts the selection. The range is resolved against a table width with
    :meth:`set_upper`; indices beyond the width are dropped.
    """

    def __init__(self, ranges: str = ""):
        self._upper: int | None = None
        self._invert = False
        self._items: list[tuple[str, str]] = []
        self.ranges = ranges

    @classmethod
    def from_indices(cls, indices: Iterable[int]) -> "ColumnRange":
        """Build a range selecting the given 0-based column indices."""
        indices = list(indices)
        for index in indices:
            if index < 0:
                raise ConfigurationError(f"Column index must be >= 0, got {index}")
        return cls(",".join(str(index + 1) for index in indices))

    @property
    def ranges(self) -> str:
        text = ",".join(
            first if first == last else f"{first}-{last}" for first, last in self._items
        )
        return f"!{text}" if self._invert and text else text

    @ranges.setter
    def ranges(self, text: str) -> None:
        text = (text or "").strip()
        invert = text.startswith("!")
        if invert:
            text = text[1:].strip()
        items: list[tuple[str, str]] = []
        for part in (item.strip() for item in text.split(",")):
            if not part:
                continue
            match = _SPAN.match(part)
            if match:
                first, last = match.group(1).strip(), match.group(2).strip()
            else:
                first = last = part
            for bound in (first, last):
                _validate_bound(bound, part)
            items.append((first, last))
        self._invert = invert
        self._items = items

    @property
    def invert(self) -> bool:
        return self._invert

    @property
    def is_empty(self) -> bool:
        return not self._items

    def set_upper(self, upper: int) -> None:
        """Bind the range to columns ``0..upper`` inclusive."""
        if upper < 0:
            raise ConfigurationError(f"Range upper limit must be >= 0, got {upper}")
        self._upper = upper

    def selection(self) -> list[int]:
        """Return the selected 0-based column indices in ascending order."""
        if self._upper is None:
            raise ConfigurationError("Range upper limit has not been set")
        upper = self._upper
        selected: set[int] = set()
        for first, last in self._items:
            start = _resolve_bound(first, upper)
            end = _resolve_bound(last, upper)
            if start > end:
                start, end = end, start
            selected.update(index for index in range(start, end + 1) if index <= upper)
        if self._invert:
            selected = set(range(upper + 1)) - selected
        return sorted(selected)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColumnRange):
            return NotImplemented
        return self.ranges == other.ranges

    def __repr__(self) -> str:
        return f"ColumnRange({self.ranges!r})"


def _validate_bound(bound: str, item: str) -> None:
    if bound in ("first", "last"):
        return
    if not bound.isdigit() or int(bound) < 1:
        raise ConfigurationError(
            f"Invalid range item '{item}': expected 1-based index, 'first' or 'last'"
        )


def _resolve_bound(bound: str, upper: int) -> int:
    if bound == "first":
        return 0
    if bound == "last":
        return upper
    return int(bound) - 1


__all__ = ["ColumnRange"]
