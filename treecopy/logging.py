"""Logging setup for the terminal session.

The UI owns the terminal, so records go to a log file when a directory is
configured and are discarded otherwise.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_DIR_ENV = "TREECOPY_LOG_DIR"
LOG_FILENAME = "treecopy.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def get_logger(name: str = "treecopy") -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(
    *,
    level: str = "info",
    log_dir: Path | None = None,
    filename: str = LOG_FILENAME,
) -> Path | None:
    """Attach a handler to the ``treecopy`` logger and return the log file path.

    ``TREECOPY_LOG_DIR`` is used when ``log_dir`` is not given. Without either,
    a ``NullHandler`` is installed and ``None`` is returned.
    """
    normalized = level.strip().upper()
    level_value = getattr(logging, normalized, logging.INFO)
    if not isinstance(level_value, int):
        level_value = logging.INFO

    package_logger = logging.getLogger("treecopy")
    package_logger.setLevel(level_value)
    package_logger.propagate = False
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    if log_dir is None:
        env_dir = os.environ.get(LOG_DIR_ENV)
        if env_dir:
            log_dir = Path(env_dir)
    if log_dir is None:
        package_logger.addHandler(logging.NullHandler())
        return None

    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / filename
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    return log_path


__all__ = ["LOG_DIR_ENV", "configure_logging", "get_logger"]
