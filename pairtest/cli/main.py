"""Cyclopts-powered CLI entrypoints for pairtest."""

from __future__ import annotations

from collections.abc import Sequence

from cyclopts import App

from pairtest._version import __version__
from pairtest.cli.commands.compare_commands import (
    compare_command,
    validate_config_command,
)

app = App(
    name="pairtest",
    help="Paired significance tests between result generators",
    version=__version__,
)
app.command(compare_command, name="compare")
app.command(validate_config_command, name="validate-config")


def main(argv: Sequence[str] | None = None) -> int:
    parsed_argv = list(argv) if argv is not None else None
    try:
        result = app(parsed_argv)
    except SystemExit as exc:  # pragma: no cover - CLI integration path
        return int(exc.code or 0)
    return int(result) if isinstance(result, int) else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
