# link_scout/logger.py
"""
The "LinkScout" logger shared by every module (``from link_scout.logger import logger``).

Records go to stdout and, when asked, to a size-rotated file. ``--debug``
tracing prints where each record came from, since a run emits one line per
crawl step.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

__all__ = ("logger", "setup_logging")

LOGGER_NAME = "LinkScout"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
TRACE_FORMAT = "%(asctime)s | %(levelname)-8s | %(module)s:%(lineno)d | %(message)s"

logger = logging.getLogger(LOGGER_NAME)
logger.propagate = False


def setup_logging(
    *,
    debug: bool = False,
    level: str = "WARNING",
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Point :data:`logger` at stdout (and *log_file*) at *level*, or DEBUG with *debug*.

    Handlers from an earlier call are closed first, so the CLI and the test
    suite can call this repeatedly.
    """
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(TRACE_FORMAT if debug else LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        # 5 MB per file, three backups
        handlers.append(
            RotatingFileHandler(log_file, maxBytes=5 * 2**20, backupCount=3, encoding="utf-8")
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if debug else level)
    return logger


setup_logging()
