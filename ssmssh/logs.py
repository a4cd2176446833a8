"""File logging setup.

The selector owns the terminal while it runs, so log records only ever go
to a file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / f"{APP_NAME}.log"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(threadName)s: %(message)s"


def configure_logging(log_path: Path | None = None, *, verbose: bool = False) -> Path | None:
    """Attach a file handler to the package logger and return its path.

    Returns ``None`` (and installs a ``NullHandler``) when the log file cannot
    be opened; logging problems never stop the selector.
    """
    package_logger = logging.getLogger(APP_NAME)
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    package_logger.propagate = False
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    target = log_path or DEFAULT_LOG_PATH
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(target, encoding="utf-8")
    except OSError:
        package_logger.addHandler(logging.NullHandler())
        return None
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(file_handler)
    return target


__all__ = ["DEFAULT_LOG_PATH", "LOG_FORMAT", "configure_logging"]
