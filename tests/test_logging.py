from __future__ import annotations

import logging
from pathlib import Path

from zenclass_queries.logging_config import DEFAULT_LOG_PATH, configure_logging


def test_configure_logging_without_file_keeps_a_stream_handler() -> None:
    configure_logging(None)
    root = logging.getLogger()
    assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)


def test_configure_logging_creates_log_directory(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "queries.log"
    configure_logging(log_path)
    assert log_path.parent.is_dir()


def test_pymongo_logs_stay_at_warning(tmp_path: Path) -> None:
    configure_logging(tmp_path / "q.log", level=logging.DEBUG)
    assert logging.getLogger("pymongo").level == logging.WARNING


def test_default_log_file_is_per_tool() -> None:
    assert DEFAULT_LOG_PATH == Path("logs/queries.log")
