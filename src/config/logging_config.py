# src/config/logging_config.py

"""Per-run timestamped logging configuration for aTrace.

Each launch (TUI or CLI) writes a dedicated log file inside ``logs/``
named after the launch time, e.g. ``logs/run_20261019_091500.log``.
Every ``atrace.*`` logger (store, storage, ui, cli) propagates into
that file, so one file tells the whole story of a session.

The console only sees warnings and errors; the TUI owns the terminal
otherwise.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

# Reusable format strings --------------------------------------------------

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d | "
    "%(message)s"
)

_CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int = logging.DEBUG) -> Path:
    """Attach file and console handlers to the ``atrace`` logger.

    Args:
        level: Threshold for the per-run log file.

    Returns:
        The :class:`~pathlib.Path` of this run's log file.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    log_file = logs_dir / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"

    app_logger = logging.getLogger("atrace")
    app_logger.setLevel(logging.DEBUG)

    # Already configured in this process (tests, re-entry from main)
    if app_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    app_logger.addHandler(file_handler)
    app_logger.addHandler(console_handler)

    app_logger.debug("Log file for this run: %s", log_file)

    return log_file
