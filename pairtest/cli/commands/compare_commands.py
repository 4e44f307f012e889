"""Comparison commands."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter
from omegaconf import OmegaConf

from pairtest.comparison import PairedTester, parse_column_option
from pairtest.comparison.reports import ComparisonReport
from pairtest.config import load_tester_config, validate_config
from pairtest.core import read_csv
from pairtest.exceptions import ConfigurationError, PairtestError
from pairtest.utils import logging_utils

logger = logging.getLogger(__name__)


def compare_command(
    *,
    table: Annotated[Path, Parameter(help="CSV file holding the result table")],
    column: Annotated[
        int | None, Parameter(help="Column to compare (1-based, numeric)")
    ] = None,
    base: Annotated[
        int | None,
        Parameter(help="Resultset to compare against (1-based); all when omitted"),
    ] = None,
    summary: Annotated[
        bool, Parameter(help="Summarize wins over all resultset pairs")
    ] = False,
    ranking: Annotated[bool, Parameter(help="Generate a resultset ranking")] = False,
    dataset_column: Annotated[
        str | None, Parameter(help="Dataset column (1-based, 'first' or 'last')")
    ] = None,
    run_column: Annotated[
        str | None, Parameter(help="Run column (1-based, 'first' or 'last')")
    ] = None,
    key_columns: Annotated[
        str | None,
        Parameter(help="Columns identifying a result generator, e.g. '1,3-5'"),
    ] = None,
    significance: Annotated[
        float | None, Parameter(help="Significance level for the paired tests")
    ] = None,
    config: Annotated[
        Path | None, Parameter(help="YAML file with tester settings")
    ] = None,
    overrides: Annotated[
        tuple[str, ...],
        Parameter(name="--set", help="Config override key=value (repeatable)"),
    ] = (),
    output: Annotated[
        str | None, Parameter(help="Also write the report (.json, .md or .txt)")
    ] = None,
    log_level: Annotated[
        str, Parameter(help="Logging level (critical/error/warning/info/debug/trace)")
    ] = "warning",
    json_logs: Annotated[bool, Parameter(help="Output logs as JSON")] = False,
) -> int:
    """Compare resultsets of a result table with paired t-tests."""
    logging_utils.configure_logging(
        level=log_level,
        log_format="json" if json_logs else "human",
    )
    try:
        settings = load_tester_config(config, overrides)
        if dataset_column is not None:
            settings.dataset_column = parse_column_option(dataset_column)
        if run_column is not None:
            settings.run_column = parse_column_option(run_column)
        if key_columns is not None:
            settings.key_columns = key_columns
        if significance is not None:
            settings.significance_level = significance
        if column is not None:
            settings.comparison_column = column - 1
        if base is not None:
            settings.base_resultset = base - 1
        validate_config(settings)
        if settings.comparison_column is None:
            raise ConfigurationError("A comparison column is required (--column)")

        if not table.exists():
            print(f"Error: Result table not found: {table}", file=sys.stderr)
            return 1
        tester = PairedTester.from_config(settings, read_csv(table))
        report = tester.report(
            settings.comparison_column,
            base=settings.base_resultset,
            summary=summary,
            ranking=ranking,
        )
        print(report.to_text())

        if output:
            _export_report(report, Path(output))
        return 0

    except PairtestError as e:
        print(f"\nError: {e}", file=sys.stderr)
        logger.debug("Command failed", exc_info=True)
        return 1


def validate_config_command(
    config: Annotated[Path, Parameter(help="YAML file with tester settings")],
    *,
    overrides: Annotated[
        tuple[str, ...],
        Parameter(name="--set", help="Config override key=value (repeatable)"),
    ] = (),
) -> int:
    """Validate a tester config file and print the merged settings."""
    try:
        settings = load_tester_config(config, overrides)
    except PairtestError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Config OK: {config}")
    print(OmegaConf.to_yaml(OmegaConf.structured(settings)))
    return 0


def _export_report(report: ComparisonReport, output_path: Path) -> None:
    suffix = output_path.suffix.lower()
    if suffix == ".json":
        output_path.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")
        print(f"\n✓ Exported to JSON: {output_path}")
    elif suffix == ".md":
        output_path.write_text(report.to_markdown(), encoding="utf-8")
        print(f"\n✓ Exported to Markdown: {output_path}")
    elif suffix == ".txt":
        output_path.write_text(report.to_text(), encoding="utf-8")
        print(f"\n✓ Exported to text: {output_path}")
    else:
        print(f"\nWarning: Unknown output format: {suffix}", file=sys.stderr)
