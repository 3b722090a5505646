"""Logging setup for the ``dependency_snapshot`` package logger.

``LOG_LEVEL`` selects verbosity (0 silent, 1 info, 2 or more debug) and
``LOG_FILE`` redirects output from stderr to a file. Only the package logger
is touched, so a host process keeps control of the root logger.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "dependency_snapshot"

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_CONFIGURED = False


def configure_logging() -> logging.Logger:
    """Attach handlers to the package logger once and return it."""
    global _CONFIGURED
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _CONFIGURED:
        return logger

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    level = _read_level(os.getenv("LOG_LEVEL", "0"))
    if level is None or level <= 0:
        logger.setLevel(logging.CRITICAL + 1)
        logger.addHandler(logging.NullHandler())
    else:
        logger.setLevel(_map_level(level))
        logger.addHandler(_build_handler(os.getenv("LOG_FILE")))

    _CONFIGURED = True
    return logger


def _build_handler(log_path: Optional[str]) -> logging.Handler:
    handler: logging.Handler
    if log_path:
        log_file = Path(log_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, _DATE_FORMAT))
    return handler


def _read_level(raw: str) -> Optional[int]:
    try:
        return int(raw.strip())
    except ValueError:
        return None


def _map_level(level: int) -> int:
    if level >= 2:
        return logging.DEBUG
    return logging.INFO
