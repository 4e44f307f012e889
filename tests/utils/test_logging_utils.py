import json
import logging
import unittest

from rich.logging import RichHandler

from pairtest.utils.logging_utils import (
    TRACE_LEVEL,
    JSONFormatter,
    configure_logging,
)


class TestJSONFormatter(unittest.TestCase):
    def test_format_structure(self):
        formatter = JSONFormatter()
        record = logging.LogRecord(
            name="pairtest.comparison.tester",
            level=logging.WARNING,
            pathname=__file__,
            lineno=10,
            msg="Skipped dataset %s",
            args=("iris",),
            exc_info=None,
        )
        record.extra = {"resultset": 2}

        formatted = formatter.format(record)
        data = json.loads(formatted)

        self.assertEqual(data["message"], "Skipped dataset iris")
        self.assertEqual(data["level"], "WARNING")
        self.assertEqual(data["logger"], "pairtest.comparison.tester")
        self.assertEqual(data["resultset"], 2)
        self.assertTrue("timestamp" in data)


class TestConfigureLogging(unittest.TestCase):
    def tearDown(self):
        configure_logging(level="warning")
        logging.captureWarnings(False)

    def test_log_format_selects_handler(self):
        configure_logging(log_format="json")
        handlers = logging.getLogger().handlers
        self.assertTrue(
            any(isinstance(h.formatter, JSONFormatter) for h in handlers)
        )

        configure_logging(log_format="human")
        handlers = logging.getLogger().handlers
        self.assertTrue(any(isinstance(h, RichHandler) for h in handlers))
        self.assertFalse(
            any(isinstance(h.formatter, JSONFormatter) for h in handlers)
        )

    def test_trace_level(self):
        configure_logging(level="trace")

        self.assertEqual(logging.getLogger().level, TRACE_LEVEL)
        self.assertEqual(logging.getLevelName(TRACE_LEVEL), "TRACE")

    def test_unknown_level_falls_back_to_info(self):
        configure_logging(level="verbose")

        self.assertEqual(logging.getLogger().level, logging.INFO)

    def test_log_file_receives_plain_text(self):
        import tempfile
        from pathlib import Path

        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "pairtest.log"
            configure_logging(level="info", log_file=str(log_path))
            logging.getLogger("pairtest.test").info("Comparing (1) with (2)")
            for handler in logging.getLogger().handlers:
                handler.flush()
            content = log_path.read_text()
            configure_logging(level="warning")

        self.assertIn("[INFO] pairtest.test: Comparing (1) with (2)", content)
