"""Logging setup for the scriptdeck process.

The terminal is in raw alternate-screen mode while the app runs, so records go
to a log file instead of stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

_LOGGER_NAME = "scriptdeck"
DEFAULT_LOG_PATH = Path(user_log_dir(_LOGGER_NAME, appauthor=False)) / "scriptdeck.log"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the scriptdeck hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Attach a single file handler to the scriptdeck logger.

    ``log_file`` defaults to the platform log directory. When the file cannot
    be opened the logger keeps a ``NullHandler`` so the UI still starts.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    target = log_file if log_file is not None else DEFAULT_LOG_PATH
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        file_handler: logging.Handler = logging.FileHandler(target, encoding="utf-8")
    except OSError:
        file_handler = logging.NullHandler()
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(file_handler)
    return logger


__all__ = ["DEFAULT_LOG_PATH", "configure_logging", "get_logger"]
