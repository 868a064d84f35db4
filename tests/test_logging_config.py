# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import logging
import unittest

from src.config.logging_config import setup_logging


class TestLoggingConfig(unittest.TestCase):
    """Verify logging setup behaviour."""

    def setUp(self) -> None:
        """Detach handlers from the atrace logger around each test."""
        app_logger = logging.getLogger("atrace")
        app_logger.handlers.clear()
        self.addCleanup(app_logger.handlers.clear)

    def test_setup_creates_log_file(self) -> None:
        """setup_logging returns a path that exists on disk."""
        log_path = setup_logging()
        self.assertTrue(log_path.exists())

    def test_log_file_naming_convention(self) -> None:
        """Log file name matches run_YYYYMMDD_HHMMSS.log format."""
        log_path = setup_logging()
        self.assertRegex(log_path.name, r"^run_\d{8}_\d{6}\.log$")

    def test_file_handler_level(self) -> None:
        """File handler defaults to DEBUG and honours the argument."""
        setup_logging(level=logging.INFO)
        file_handlers = [
            h
            for h in logging.getLogger("atrace").handlers
            if isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(file_handlers), 1)
        self.assertEqual(file_handlers[0].level, logging.INFO)

    def test_console_handler_level_warning(self) -> None:
        """Console handler only passes warnings and above."""
        setup_logging()
        stream_handlers = [
            h
            for h in logging.getLogger("atrace").handlers
            if isinstance(h, logging.StreamHandler)
            and not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(stream_handlers), 1)
        self.assertEqual(stream_handlers[0].level, logging.WARNING)

    def test_repeated_calls_no_duplicate_handlers(self) -> None:
        """Calling setup_logging twice does not duplicate handlers."""
        setup_logging()
        count_before = len(logging.getLogger("atrace").handlers)
        setup_logging()
        self.assertEqual(
            len(logging.getLogger("atrace").handlers), count_before
        )

    def test_child_loggers_reach_file(self) -> None:
        """Module loggers under atrace.* end up in the run log."""
        log_path = setup_logging()
        logging.getLogger("atrace.store").info("hello from the store")
        for handler in logging.getLogger("atrace").handlers:
            handler.flush()
        self.assertIn(
            "hello from the store",
            log_path.read_text(encoding="utf-8"),
        )

    def test_log_file_inside_logs_dir(self) -> None:
        """Log file is created inside the logs/ directory."""
        log_path = setup_logging()
        self.assertEqual(log_path.parent.name, "logs")


if __name__ == "__main__":
    unittest.main()
