import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from . import settings

LOG_FILENAME = "app.log"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3

CONSOLE_FORMAT = "%(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _handler(handler: logging.Handler, level: int | str, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def setup_logger(
    name: Optional[str] = None,
    log_level: int | str = settings.LOG_LEVEL,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Configures `name` (the root logger when omitted) for a report run:
    bare messages on stdout, timestamped records in LOG_DIR/app.log.
    Calling it again only updates the level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    if logger.handlers:
        return logger

    target_dir = log_dir or settings.LOG_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    logger.addHandler(_handler(logging.StreamHandler(sys.stdout), log_level, CONSOLE_FORMAT))
    logger.addHandler(
        _handler(
            RotatingFileHandler(
                target_dir / LOG_FILENAME,
                maxBytes=LOG_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding="utf-8",
            ),
            log_level,
            FILE_FORMAT,
        )
    )
    return logger
