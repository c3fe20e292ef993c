"""Log file setup for the application."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TypeVar

CRATE_NAME = "wherehouse"
PROJECT_NAME = CRATE_NAME.upper()
DATA_ENV = f"{PROJECT_NAME}_DATA"
LOG_ENV = f"{PROJECT_NAME}_LOGLEVEL"
LOG_FILE = f"{CRATE_NAME}.log"

_TRACE = 5
_LEVELS = {
    "trace": _TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "off": logging.CRITICAL + 10,
}

T = TypeVar("T")

logger = logging.getLogger(CRATE_NAME)


def get_data_dir() -> Path:
    """Directory that holds the log file."""
    return Path(".") / ".data"


def _parse_level(spec: str) -> int:
    """Pick this application's level out of a ``level`` or ``target=level`` list."""
    level = logging.INFO
    for directive in filter(None, (part.strip() for part in spec.split(","))):
        target, sep, name = directive.rpartition("=")
        if sep and target != CRATE_NAME:
            continue
        level = _LEVELS.get(name.lower(), level)
    return level


def initialize_logging() -> Path:
    """Create the log file and route the application's logger to it.

    The level comes from the ``WHEREHOUSE_LOGLEVEL`` environment variable,
    defaulting to info. Returns the path of the log file.
    """
    directory = get_data_dir()
    directory.mkdir(parents=True, exist_ok=True)
    log_path = directory / LOG_FILE

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(pathname)s:%(lineno)d: %(message)s")
    )
    logger.addHandler(handler)
    logger.setLevel(_parse_level(os.environ.get(LOG_ENV) or f"{CRATE_NAME}=info"))
    return log_path


def trace_dbg(value: T, level: int = logging.DEBUG) -> T:
    """Log ``value`` at ``level`` and hand it back unchanged."""
    logger.log(level, "value=%r", value, stacklevel=2)
    return value