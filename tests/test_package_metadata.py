"""Tests for package metadata and exports."""

import pairtest


def test_version_string_format():
    assert isinstance(pairtest.__version__, str)
    assert pairtest.__version__
    assert "." in pairtest.__version__


def test_package_exports_accessible():
    """Lazy-loaded submodules should be accessible via attribute access."""
    assert pairtest.config is not None
    assert pairtest.utils is not None
    assert pairtest.cli is not None


def test_core_api_accessible():
    assert callable(pairtest.PairedTester)
    assert callable(pairtest.partition)
    assert callable(pairtest.read_csv)


def test_exceptions_accessible():
    assert issubclass(pairtest.ConfigurationError, pairtest.PairtestError)
    assert issubclass(pairtest.DataIntegrityError, pairtest.PairtestError)
