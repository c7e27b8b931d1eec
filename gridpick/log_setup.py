"""Logger configuration bootstrap.

The picker owns the terminal while it runs, so log records go to a rotating
file under the platform log directory instead of the console.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

LOGGER_NAME = "gridpick"
DEFAULT_LOG_FILE = Path(user_log_dir(LOGGER_NAME, appauthor=False)) / "gridpick.log"


def setup_logging(log_file: Path | None = DEFAULT_LOG_FILE, level: int = logging.INFO) -> logging.Logger:
    """Configure the package logger and return it.

    Existing handlers are replaced so repeated calls do not duplicate output.
    If the log directory cannot be created, records are dropped silently.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    handler: logging.Handler
    if log_file is None:
        handler = logging.NullHandler()
    else:
        resolved = Path(log_file).expanduser()
        try:
            resolved.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.handlers.RotatingFileHandler(
                resolved,
                maxBytes=1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
        except OSError:
            handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)
    return logger


__all__ = ["DEFAULT_LOG_FILE", "LOGGER_NAME", "setup_logging"]
