"""Tests for loguru sink configuration."""

from __future__ import annotations

from datetime import datetime

import pytest
from loguru import logger

from utils.logging_config import configure_logging, log_file_name


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    logger.remove()


def test_file_sink_created(tmp_path):
    logs_dir = tmp_path / "logs"

    log_file = configure_logging(logs_dir, level="DEBUG")
    logger.info("hello from test")
    logger.remove()

    assert log_file is not None
    assert log_file.parent == logs_dir
    assert log_file.name.startswith("arkham_proxies_")
    assert "hello from test" in log_file.read_text(encoding="utf-8")


def test_unwritable_dir_disables_file_logging(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    assert configure_logging(blocker / "logs") is None


def test_log_file_name_uses_start_time():
    assert log_file_name(datetime(2024, 3, 5, 7, 8, 9)) == "arkham_proxies_20240305_070809.log"
