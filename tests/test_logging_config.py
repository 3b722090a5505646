"""
Dependency Snapshot Repository
Introductory remarks: This module is part of the Dependency Snapshot codebase.

Unit tests for logging configuration helper.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

from dependency_snapshot import logging_config


@pytest.fixture(autouse=True)
def package_logger(monkeypatch: pytest.MonkeyPatch) -> Iterator[logging.Logger]:
    """
    package_logger: Reset module state and restore the package logger.
    :param monkeypatch:
    :returns:
    """

    monkeypatch.setattr(logging_config, "_CONFIGURED", False)
    logger = logging.getLogger(logging_config.PACKAGE_LOGGER)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    handlers, level, propagate = saved
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


def test_read_level_invalid_returns_none() -> None:
    assert logging_config._read_level("not-an-int") is None
    assert logging_config._read_level(" 2 ") == 2


def test_map_level_thresholds() -> None:
    assert logging_config._map_level(1) == logging.INFO
    assert logging_config._map_level(2) == logging.DEBUG


def test_silent_mode_installs_null_handler(
    monkeypatch: pytest.MonkeyPatch, package_logger: logging.Logger
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "0")
    monkeypatch.setenv("LOG_FILE", "/tmp/ignored.log")

    logger = logging_config.configure_logging()

    assert logger is package_logger
    assert [type(h) for h in logger.handlers] == [logging.NullHandler]
    assert not logger.isEnabledFor(logging.CRITICAL)
    assert logger.propagate is False


def test_stderr_handler_without_log_file(
    monkeypatch: pytest.MonkeyPatch, package_logger: logging.Logger
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "1")
    monkeypatch.delenv("LOG_FILE", raising=False)

    logging_config.configure_logging()
    logging_config.configure_logging()

    assert len(package_logger.handlers) == 1
    handler = package_logger.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert handler.stream is sys.stderr
    assert package_logger.level == logging.INFO


def test_file_handler_writes_package_records(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    package_logger: logging.Logger,
) -> None:
    log_path = tmp_path / "logs" / "snapshot.log"
    monkeypatch.setenv("LOG_LEVEL", "2")
    monkeypatch.setenv("LOG_FILE", str(log_path))

    logging_config.configure_logging()
    logging.getLogger("dependency_snapshot.service").debug("walked %d", 3)
    for handler in package_logger.handlers:
        handler.flush()

    assert package_logger.level == logging.DEBUG
    assert isinstance(package_logger.handlers[0], logging.FileHandler)
    content = log_path.read_text(encoding="utf-8")
    assert "DEBUG | dependency_snapshot.service | walked 3" in content


def test_reconfiguring_does_not_stack_handlers(
    monkeypatch: pytest.MonkeyPatch, package_logger: logging.Logger
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "1")
    monkeypatch.delenv("LOG_FILE", raising=False)

    logging_config.configure_logging()
    monkeypatch.setattr(logging_config, "_CONFIGURED", False)
    logging_config.configure_logging()

    assert len(package_logger.handlers) == 1
