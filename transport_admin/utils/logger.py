"""
Centralised logging configuration for the entire application.
Logs to console and to a rotating file, by default in <repo>/logs/.

LOG_DIR moves the file elsewhere. LOG_LEVELS takes per-logger overrides,
e.g. "sqlalchemy.engine=INFO,transport_admin.gateway=DEBUG", applied on top of LOG_LEVEL.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from transport_admin.config import settings

LOG_LEVEL = settings.LOG_LEVEL.upper()
LOG_DIR = settings.LOG_DIR or os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "logs")
LOG_FILE = "transport.log"

_configured = False


def parse_level_overrides(spec: str) -> dict:
    """Turn "name=LEVEL,name=LEVEL" into {name: LEVEL}. Unknown levels raise ValueError."""
    overrides = {}
    for item in (spec or "").split(","):
        if not item.strip():
            continue
        name, sep, level = item.partition("=")
        level = level.strip().upper()
        if not sep or not name.strip() or not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid LOG_LEVELS entry: '{item.strip()}'")
        overrides[name.strip()] = level
    return overrides


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    fmt = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root = logging.getLogger()
    root.setLevel(LOG_LEVEL)

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    root.addHandler(console)

    # Keeps last 10 × 5MB log files
    os.makedirs(LOG_DIR, exist_ok=True)
    file_handler = RotatingFileHandler(
        filename=os.path.join(LOG_DIR, LOG_FILE),
        maxBytes=5 * 1024 * 1024,
        backupCount=10,
        encoding="utf-8",
    )
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    # Handlers pass everything through; levels live on the loggers so overrides can go below LOG_LEVEL
    for name, level in parse_level_overrides(settings.LOG_LEVELS).items():
        logging.getLogger(name).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    _configure_root_logger()
    return logging.getLogger(name)
