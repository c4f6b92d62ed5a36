"""Tests for logging configuration."""

import json
import logging
from logging.handlers import RotatingFileHandler

import structlog

from codeful.main import configure_logging


def test_configure_logging_console_only():
    """Console-only mode installs a single stream handler."""
    logging.root.handlers.clear()

    configure_logging(log_level="DEBUG", log_file="")

    assert len(logging.root.handlers) == 1
    assert isinstance(logging.root.handlers[0], logging.StreamHandler)
    assert not isinstance(logging.root.handlers[0], RotatingFileHandler)
    assert logging.root.level == logging.DEBUG


def test_configure_logging_unknown_level_falls_back_to_info():
    logging.root.handlers.clear()

    configure_logging(log_level="chatty")

    assert logging.root.level == logging.INFO


def test_configure_logging_with_rotating_file(tmp_path):
    """A log file adds a RotatingFileHandler after the console handler."""
    logging.root.handlers.clear()

    log_file = tmp_path / "logs" / "codeful.log"
    configure_logging(
        log_level="WARNING",
        log_file=str(log_file),
        log_file_max_bytes=1_000_000,
        log_file_backup_count=2,
    )

    assert len(logging.root.handlers) == 2
    file_handler = logging.root.handlers[1]
    assert isinstance(file_handler, RotatingFileHandler)
    assert file_handler.maxBytes == 1_000_000
    assert file_handler.backupCount == 2
    assert logging.root.level == logging.WARNING
    assert log_file.parent.exists()


def test_configure_logging_writes_json_events(tmp_path):
    """File logging renders events as JSON lines with their context."""
    logging.root.handlers.clear()

    log_file = tmp_path / "app.log"
    configure_logging(log_level="INFO", log_file=str(log_file))

    logger = structlog.get_logger()
    logger.info("reveal_started", length=12, unit="word")

    for handler in logging.root.handlers:
        handler.flush()

    lines = [line for line in log_file.read_text(encoding="utf-8").splitlines() if line]
    assert lines
    event = json.loads(lines[-1])
    assert event["event"] == "reveal_started"
    assert event["length"] == 12
    assert event["level"] == "info"


def test_configure_logging_quiets_access_log_above_debug():
    logging.root.handlers.clear()

    configure_logging(log_level="INFO")
    assert logging.getLogger("aiohttp.access").level == logging.WARNING

    configure_logging(log_level="DEBUG")
    assert logging.getLogger("aiohttp.access").level == logging.DEBUG
