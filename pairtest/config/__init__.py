"""Tester configuration schema and loader."""

from pairtest.config.loader import load_tester_config, validate_config
from pairtest.config.schema import DEFAULT_STRIP_PREFIXES, TesterConfig

__all__ = [
    "DEFAULT_STRIP_PREFIXES",
    "TesterConfig",
    "load_tester_config",
    "validate_config",
]
