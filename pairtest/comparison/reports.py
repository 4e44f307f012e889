"""Report types produced by the paired tester.

Each report is structured data first. ``to_text`` reproduces the classic
fixed-width tester layout, ``to_markdown`` and ``to_dict`` serve exports.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

SIGNIFICANTLY_HIGHER = "v"
SIGNIFICANTLY_LOWER = "*"
NOT_SIGNIFICANT = " "

_DATASET_WIDTH = 25
_RESULTSET_WIDTH = 9


def resultset_code(index: int) -> str:
    """Letter code for a resultset: ``a``..``z``, then ``aa``, ``ab``, ..."""
    if index < 0:
        raise ValueError(f"Resultset index must be >= 0, got {index}")
    letters = ""
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("a") + remainder) + letters
    return letters


def pad_left(text: str, width: int) -> str:
    """Right-align ``text`` in ``width`` characters, truncating longer text."""
    return text[:width].rjust(width)


def pad_right(text: str, width: int) -> str:
    """Left-align ``text`` in ``width`` characters, truncating longer text."""
    return text[:width].ljust(width)


def _format_mean(value: float, width: int = _RESULTSET_WIDTH - 2) -> str:
    return f"{value:{width}.2f}"


@dataclass
class SkippedComparison:
    """A per-dataset comparison that failed and was left out of an aggregate."""

    dataset: str
    first: int
    second: int
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "dataset": self.dataset,
            "first": self.first,
            "second": self.second,
            "reason": self.reason,
        }


@dataclass
class WinMatrix:
    """Pairwise significant-win counts over all datasets.

    ``counts[i][j]`` is the number of datasets on which resultset ``j`` scored
    significantly higher than resultset ``i``. The diagonal is unused.
    """

    labels: list[str]
    datasets: list[str]
    counts: list[list[int]]
    skipped: list[SkippedComparison] = field(default_factory=list)

    @property
    def num_resultsets(self) -> int:
        return len(self.labels)

    @property
    def num_datasets(self) -> int:
        return len(self.datasets)

    def total_wins(self) -> int:
        return sum(
            self.counts[i][j]
            for i in range(self.num_resultsets)
            for j in range(self.num_resultsets)
            if i != j
        )

    def ranking(self) -> "Ranking":
        """Rank resultsets by net significant wins (wins minus losses)."""
        n = self.num_resultsets
        wins = [0] * n
        losses = [0] * n
        diff = [0] * n
        for i in range(n):
            for j in range(n):
                if i == j:
                    continue
                wins[j] += self.counts[i][j]
                diff[j] += self.counts[i][j]
                losses[i] += self.counts[i][j]
                diff[i] -= self.counts[i][j]
        # Stable sort: resultsets with equal net keep their index order
        order = sorted(range(n), key=lambda index: -diff[index])
        return Ranking(
            rows=[
                RankingRow(
                    index=index,
                    label=self.labels[index],
                    net=diff[index],
                    wins=wins[index],
                    losses=losses[index],
                )
                for index in order
            ]
        )

    def to_text(self) -> str:
        n = self.num_resultsets
        width = max(
            len(str(max(n, 1))),
            len(str(max(self.num_datasets, 1))),
            len(resultset_code(max(n - 1, 0))),
        )
        lines = [
            "".join(" " + pad_left(resultset_code(i), width) for i in range(n))
            + "  (No. of datasets where [col] >> [row])"
        ]
        for i in range(n):
            cells = "".join(
                " " + pad_left("-" if i == j else str(self.counts[i][j]), width)
                for j in range(n)
            )
            lines.append(f"{cells} | {resultset_code(i)} = {self.labels[i]}")
        return "\n".join(lines) + "\n"

    def to_markdown(self) -> str:
        codes = [resultset_code(i) for i in range(self.num_resultsets)]
        lines = [
            "| | " + " | ".join(codes) + " | Resultset |",
            "| --- | " + " | ".join(["---"] * len(codes)) + " | --- |",
        ]
        for i, code in enumerate(codes):
            cells = [
                "-" if i == j else str(self.counts[i][j])
                for j in range(self.num_resultsets)
            ]
            lines.append(
                f"| **{code}** | " + " | ".join(cells) + f" | {self.labels[i]} |"
            )
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "labels": list(self.labels),
            "datasets": list(self.datasets),
            "counts": [list(row) for row in self.counts],
            "skipped": [entry.to_dict() for entry in self.skipped],
        }


@dataclass
class RankingRow:
    index: int
    label: str
    net: int
    wins: int
    losses: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "label": self.label,
            "net": self.net,
            "wins": self.wins,
            "losses": self.losses,
        }


@dataclass
class Ranking:
    """Resultsets ordered by descending net wins."""

    rows: list[RankingRow]

    def to_text(self) -> str:
        biggest = max(
            [row.wins for row in self.rows] + [row.losses for row in self.rows] + [0]
        )
        width = max(len(str(biggest)) + 1, len(">-<"))
        headers = [pad_left(title, width) for title in (">-<", ">", "<")]
        lines = [" ".join(headers) + " Resultset"]
        for row in self.rows:
            lines.append(
                f"{pad_left(str(row.net), width)} {pad_left(str(row.wins), width)} "
                f"{pad_left(str(row.losses), width)} {row.label}"
            )
        return "\n".join(lines) + "\n"

    def to_markdown(self) -> str:
        lines = [
            "| Net | Wins | Losses | Resultset |",
            "| ---: | ---: | ---: | --- |",
        ]
        for row in self.rows:
            lines.append(f"| {row.net} | {row.wins} | {row.losses} | {row.label} |")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {"rows": [row.to_dict() for row in self.rows]}


@dataclass
class ComparisonCell:
    """Mean of a compared resultset and its significance marker against the base."""

    mean: float
    marker: str


@dataclass
class DatasetRow:
    dataset: str
    count: int
    base_mean: float
    # Keyed by resultset index; None when that comparison failed
    cells: dict[int, ComparisonCell | None] = field(default_factory=dict)


@dataclass
class WinTieLoss:
    win: int = 0
    tie: int = 0
    loss: int = 0

    def __str__(self) -> str:
        return f"({self.win}/{self.tie}/{self.loss})"


@dataclass
class FullComparison:
    """Per-dataset comparison of one base resultset against all others.

    A ``v`` marks a resultset significantly higher than the base and counts as
    a win for it, ``*`` marks one significantly lower and counts as a loss.
    """

    base: int
    labels: list[str]
    rows: list[DatasetRow]
    totals: dict[int, WinTieLoss]
    skipped: list[str] = field(default_factory=list)
    failures: list[SkippedComparison] = field(default_factory=list)

    @property
    def others(self) -> list[int]:
        return [index for index in range(len(self.labels)) if index != self.base]

    def to_text(self) -> str:
        base_label = pad_left(
            f"({self.base + 1}) {self.labels[self.base]}", _RESULTSET_WIDTH + 3
        )
        titles = pad_right("Dataset", _DATASET_WIDTH) + " " + base_label
        separator = "-" * (len(titles) + 3)
        titles += " | "
        for index in self.others:
            label = pad_left(f"({index + 1}) {self.labels[index]}", _RESULTSET_WIDTH)
            titles += label + " "
            separator += "-" * (len(label) + 1)

        lines = [titles, separator]
        for row in self.rows:
            line = (
                pad_right(row.dataset, _DATASET_WIDTH)
                + pad_left(f"({row.count})", 5)
                + " "
                + _format_mean(row.base_mean)
                + " | "
            )
            for index in self.others:
                cell = row.cells.get(index)
                if cell is None:
                    line += " " * (_RESULTSET_WIDTH + 1)
                else:
                    line += f"{_format_mean(cell.mean)} {cell.marker} "
            lines.append(line)
        lines.append(separator)
        totals = pad_left("(v/ /*)", _DATASET_WIDTH + 4 + _RESULTSET_WIDTH) + " | "
        for index in self.others:
            totals += pad_left(str(self.totals[index]), _RESULTSET_WIDTH) + " "
        lines.append(totals)
        if self.skipped:
            lines.append("Skipped: " + " ".join(self.skipped))
        return "\n".join(lines) + "\n"

    def to_markdown(self) -> str:
        headers = ["Dataset", f"({self.base + 1}) {self.labels[self.base]}"] + [
            f"({index + 1}) {self.labels[index]}" for index in self.others
        ]
        lines = [
            "| " + " | ".join(headers) + " |",
            "| --- | " + " | ".join(["---:"] * (len(headers) - 1)) + " |",
        ]
        for row in self.rows:
            values = [row.dataset, f"{row.base_mean:.2f} ({row.count})"]
            for index in self.others:
                cell = row.cells.get(index)
                values.append("" if cell is None else f"{cell.mean:.2f} {cell.marker}".rstrip())
            lines.append("| " + " | ".join(values) + " |")
        lines.append(
            "| (v/ /*) | | "
            + " | ".join(str(self.totals[index]) for index in self.others)
            + " |"
        )
        if self.skipped:
            lines.append("")
            lines.append("Skipped: " + ", ".join(self.skipped))
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "base": self.base,
            "labels": list(self.labels),
            "rows": [
                {
                    "dataset": row.dataset,
                    "count": row.count,
                    "base_mean": row.base_mean,
                    "cells": {
                        str(index): (
                            None
                            if cell is None
                            else {"mean": cell.mean, "marker": cell.marker.strip()}
                        )
                        for index, cell in row.cells.items()
                    },
                }
                for row in self.rows
            ],
            "totals": {
                str(index): {"win": wtl.win, "tie": wtl.tie, "loss": wtl.loss}
                for index, wtl in self.totals.items()
            },
            "skipped": list(self.skipped),
            "failures": [entry.to_dict() for entry in self.failures],
        }


@dataclass
class ComparisonReport:
    """Everything a tester run produced for one comparison column."""

    column: str
    num_datasets: int
    labels: list[str]
    significance_level: float
    created_at: str
    summary: WinMatrix | None = None
    ranking: Ranking | None = None
    full: list[FullComparison] = field(default_factory=list)

    def legend_text(self) -> str:
        return render_legend(self.labels)

    def header_text(self) -> str:
        return render_header(
            self.column,
            self.num_datasets,
            len(self.labels),
            self.significance_level,
            self.created_at,
        )

    def to_text(self) -> str:
        parts = [self.header_text()]
        if self.ranking is not None:
            parts.append(self.ranking.to_text())
        if self.summary is not None:
            parts.append(self.summary.to_text())
        if self.full:
            parts.append(self.legend_text())
            parts.extend(table.to_text() for table in self.full)
        return "\n".join(parts)

    def to_markdown(self) -> str:
        lines = [
            "# Paired Comparison Report\n",
            f"**Analysing:** {self.column}  ",
            f"**Datasets:** {self.num_datasets}  ",
            f"**Resultsets:** {len(self.labels)}  ",
            f"**Confidence:** {self.significance_level} (two tailed)  ",
            f"**Date:** {self.created_at}\n",
            "## Resultsets\n",
        ]
        lines.extend(f"{i + 1}. {label}" for i, label in enumerate(self.labels))
        if self.ranking is not None:
            lines += ["", "## Ranking\n", self.ranking.to_markdown()]
        if self.summary is not None:
            lines += ["", "## Significant Wins\n", self.summary.to_markdown()]
        for table in self.full:
            lines += [
                "",
                f"## Compared to ({table.base + 1}) {self.labels[table.base]}\n",
                table.to_markdown(),
            ]
        return "\n".join(lines) + "\n"

    def to_dict(self) -> dict[str, Any]:
        return {
            "column": self.column,
            "num_datasets": self.num_datasets,
            "labels": list(self.labels),
            "significance_level": self.significance_level,
            "created_at": self.created_at,
            "summary": None if self.summary is None else self.summary.to_dict(),
            "ranking": None if self.ranking is None else self.ranking.to_dict(),
            "full": [table.to_dict() for table in self.full],
        }


def render_header(
    column: str,
    num_datasets: int,
    num_resultsets: int,
    significance_level: float,
    created_at: str,
) -> str:
    return (
        f"Analysing:  {column}\n"
        f"Datasets:   {num_datasets}\n"
        f"Resultsets: {num_resultsets}\n"
        f"Confidence: {significance_level} (two tailed)\n"
        f"Date:       {created_at}\n\n"
    )


def render_legend(labels: Sequence[str]) -> str:
    return "".join(f"({i + 1}) {label}\n" for i, label in enumerate(labels)) + "\n"


__all__ = [
    "SIGNIFICANTLY_HIGHER",
    "SIGNIFICANTLY_LOWER",
    "NOT_SIGNIFICANT",
    "ComparisonCell",
    "ComparisonReport",
    "DatasetRow",
    "FullComparison",
    "Ranking",
    "RankingRow",
    "SkippedComparison",
    "WinMatrix",
    "WinTieLoss",
    "pad_left",
    "pad_right",
    "render_header",
    "render_legend",
    "resultset_code",
]
