"""Logging setup for a query run.

Logs go to stdout and, optionally, a UTF-8 file. The report tables are
printed separately, so a run's log file holds only load counts, connection
events and failures. PyMongo's own loggers are held at WARNING or above.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_LOG_PATH = Path("logs/queries.log")
QUIET_LOGGERS = ("pymongo",)


def configure_logging(log_path: Path | None = DEFAULT_LOG_PATH, level: int = logging.INFO) -> None:
    """Configure root logging handlers and formatting.

    Args:
        log_path: File to append logs to; None logs to stdout only.
        level: Logging level for this package (defaults to INFO).
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
