"""Loguru sinks for the console and a per-run log file."""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

from loguru import logger

from utils.constants import APP_NAMESPACE, LOGS_DIR

LOG_ROTATION = "5 MB"
LOG_RETENTION = 5


def log_file_name(started_at: datetime) -> str:
    return f"{APP_NAMESPACE}_{started_at:%Y%m%d_%H%M%S}.log"


def configure_logging(logs_dir: Path | None = None, level: str = "INFO") -> Path | None:
    """
    Replace loguru's sinks with stderr plus a rotating file under ``logs_dir``.

    Args:
        logs_dir: Directory for log files, ``LOGS_DIR`` by default
        level: Minimum level for both sinks

    Returns:
        Path of the log file, or None when ``logs_dir`` cannot be used
        (console logging still works).
    """
    logs_dir = logs_dir or LOGS_DIR
    logger.remove()
    logger.add(sys.stderr, level=level, backtrace=True, diagnose=False)

    log_file = logs_dir / log_file_name(datetime.now())
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=level,
            rotation=LOG_ROTATION,
            retention=LOG_RETENTION,
            backtrace=True,
            diagnose=False,
        )
    except OSError as exc:
        logger.warning(f"File logging disabled; cannot use {logs_dir}: {exc}")
        return None

    logger.debug(f"Logging to {log_file}")
    return log_file
