"""Structured configuration definitions for OmegaConf."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_STRIP_PREFIXES = ("weka.classifiers.",)


@dataclass
class TesterConfig:
    """Tester settings. Column indices are 0-based; -1 selects the last column."""

    dataset_column: int = -1
    run_column: int = -1
    # 1-based range text, e.g. "1,3-5"
    key_columns: str = ""
    significance_level: float = 0.05
    strip_prefixes: list[str] = field(
        default_factory=lambda: list(DEFAULT_STRIP_PREFIXES)
    )
    comparison_column: int | None = None
    base_resultset: int | None = None
