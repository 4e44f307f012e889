"""Load tester configuration from YAML files and dotted overrides."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from pairtest.core.ranges import ColumnRange
from pairtest.exceptions import ConfigurationError
from pairtest.statistics import validate_significance_level

from . import schema


def load_tester_config(
    path: str | Path | None = None,
    overrides: Sequence[str] = (),
) -> schema.TesterConfig:
    """Merge a YAML file and ``key=value`` overrides onto the defaults.

    Args:
        path: Optional YAML file holding ``TesterConfig`` fields.
        overrides: Dotted overrides such as ``significance_level=0.01``.

    Raises:
        ConfigurationError: The file is missing or a value does not fit the schema.
    """
    layers = [OmegaConf.structured(schema.TesterConfig)]
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")
        layers.append(OmegaConf.load(config_path))
    if overrides:
        layers.append(OmegaConf.from_dotlist(list(overrides)))

    try:
        merged = OmegaConf.merge(*layers)
        config = OmegaConf.to_object(merged)
    except OmegaConfBaseException as exc:
        raise ConfigurationError(f"Invalid tester configuration: {exc}") from exc

    validate_config(config)
    return config


def validate_config(config: schema.TesterConfig) -> None:
    validate_significance_level(config.significance_level)
    for name in ("dataset_column", "run_column"):
        value = getattr(config, name)
        if value < -1:
            raise ConfigurationError(f"{name} must be >= -1, got {value}")
    if config.comparison_column is not None and config.comparison_column < 0:
        raise ConfigurationError(
            f"comparison_column must be >= 0, got {config.comparison_column}"
        )
    if config.base_resultset is not None and config.base_resultset < 0:
        raise ConfigurationError(
            f"base_resultset must be >= 0, got {config.base_resultset}"
        )
    # Parse once so malformed ranges fail at load time
    ColumnRange(config.key_columns)


__all__ = ["load_tester_config", "validate_config"]
