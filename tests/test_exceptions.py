"""Tests for the pairtest exception hierarchy."""

import pytest

from pairtest.exceptions import (
    ConfigurationError,
    DataIntegrityError,
    DatasetError,
    PairtestError,
    RunAlignmentWarning,
)


class TestExceptionHierarchy:
    """All domain exceptions inherit from PairtestError."""

    @pytest.mark.parametrize(
        "exc_cls", [ConfigurationError, DatasetError, DataIntegrityError]
    )
    def test_inherits_from_pairtest_error(self, exc_cls):
        assert issubclass(exc_cls, PairtestError)

    @pytest.mark.parametrize(
        "exc_cls", [ConfigurationError, DatasetError, DataIntegrityError]
    )
    def test_catchable_as_value_error(self, exc_cls):
        with pytest.raises(ValueError):
            raise exc_cls("bad input")

    def test_pairtest_error_is_exception(self):
        assert issubclass(PairtestError, Exception)
        assert not issubclass(PairtestError, ValueError)

    def test_run_alignment_is_a_warning(self):
        assert issubclass(RunAlignmentWarning, UserWarning)
        assert not issubclass(RunAlignmentWarning, PairtestError)


def test_message_preserved():
    msg = "Results for dataset=iris differ in size"
    assert str(DataIntegrityError(msg)) == msg
