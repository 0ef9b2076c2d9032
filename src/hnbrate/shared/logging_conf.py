# src/hnbrate/shared/logging_conf.py
"""
Logging Configuration - Root Logger Setup

Configures the root logger once at startup so that refresh outcomes of the
rate cache, fetch failures and API errors end up in one stream: stdout,
a rotating log file, or both.

Files that USE this module:
- hnbrate.app (setup_logging with values from settings)

Files that this module USES:
- None (pure configuration module)
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional, Union


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level=logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    log_stdout: bool = True,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """
    Install the service's handlers on the root logger.

    Args:
        level: Logging level
        log_file: Rotating log file to write (its directory is created)
        log_stdout: Also log to stdout; with neither target, stdout is used anyway
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files kept
    """
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    handlers: List[logging.Handler] = []

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"))
    if log_stdout or not handlers:
        handlers.append(logging.StreamHandler(sys.stdout))

    for handler in handlers:
        handler.setFormatter(formatter)

    # force drops root handlers installed by earlier calls
    logging.basicConfig(level=level, handlers=handlers, force=True)

    logging.getLogger(__name__).info(
        "Logging configured: file=%s, stdout=%s, level=%s",
        log_file or "-", log_stdout or not log_file, logging.getLevelName(level),
    )
