"""Utility helpers for configuring package-wide logging."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from rich.logging import RichHandler
from rich.traceback import install as install_rich_traceback

TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")


def _trace(self, message, *args, **kwargs):
    if self.isEnabledFor(TRACE_LEVEL):
        self._log(TRACE_LEVEL, message, args, **kwargs)


logging.Logger.trace = _trace  # type: ignore[attr-defined]

_LEVELS: Mapping[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE_LEVEL,
}


class JSONFormatter(logging.Formatter):
    """Formatter that outputs JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "line": record.lineno,
        }

        # Structured context attached via ``extra={"extra": {...}}``
        if hasattr(record, "extra"):
            data.update(record.extra)  # type: ignore

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        return json.dumps(data)


def configure_logging(
    level: str = "info",
    log_format: str = "human",
    log_file: str | None = None,
) -> None:
    """Configure root logging.

    Args:
        level: Logging level (trace, debug, info, warning, error, critical)
        log_format: "human" (Rich) or "json"
        log_file: Optional path to write logs to
    """
    install_rich_traceback()
    numeric_level = _LEVELS.get(level.lower(), logging.INFO)

    handlers: list[logging.Handler] = []

    if log_format == "json":
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(JSONFormatter())
        handlers.append(console_handler)
    else:
        handlers.append(
            RichHandler(
                rich_tracebacks=True,
                markup=False,
                keywords=[
                    "Resultset",
                    "Dataset",
                    "Comparing",
                    "Skipped",
                ],
            )
        )

    if log_file:
        file_handler = logging.FileHandler(log_file)
        if log_format == "json":
            file_handler.setFormatter(JSONFormatter())
        else:
            # Plain text in files so they carry no console control codes
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
        handlers.append(file_handler)

    logging.basicConfig(
        level=numeric_level,
        handlers=handlers,
        force=True,
    )
    # Run-alignment warnings reach the same handlers as everything else
    logging.captureWarnings(True)


__all__ = [
    "configure_logging",
    "TRACE_LEVEL",
    "JSONFormatter",
]
