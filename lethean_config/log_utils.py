"""Logging-related utilities.

The library itself only attaches a ``NullHandler``. Hosts that want a log file
next to the service's other state call :func:`configure_logging` once at
startup.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Union

LOG_FILE_NAME = "lethean.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def configure_logging(log_dir: Union[str, Path], level: int = logging.INFO) -> Path:
    """Log to ``<log_dir>/lethean.log`` and stdout.

    Does not clobber an existing logging configuration (e.g. when embedded in
    an application that already set up handlers). Returns the log file path
    either way.

    A natural ``log_dir`` is the store's cache directory::

        configure_logging(store.directories.cache)
    """

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=level,
            format=LOG_FORMAT,
            handlers=[
                logging.FileHandler(str(log_path), mode="a", encoding="utf-8"),
                logging.StreamHandler(sys.stdout),
            ],
        )
    return log_path
