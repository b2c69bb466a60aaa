"""Logging setup: console, rotating main log, and a separate version-history log."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from config.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAIN_LOG_NAME = "storykeeper.log"
HISTORY_LOG_NAME = "history.log"

# Loggers whose records also go to the history log
HISTORY_LOGGER = "versioning"

_MAX_BYTES = 10 * 1024 * 1024
_BACKUP_COUNT = 5


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        str(path),
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: int = logging.INFO,
    log_dir: Optional[str | Path] = None,
    console_enabled: bool = True,
) -> None:
    """Configure application-wide logging.

    The root logger gets a console handler and ``storykeeper.log``. Records
    from the ``versioning`` package (versions recorded, snapshots, restores)
    are additionally written to ``history.log`` at INFO and above, whatever
    the root level, so the edit history stays auditable when running quietly.

    Args:
        level: Root logging level (e.g., logging.DEBUG, logging.INFO).
        log_dir: Directory for log files. Defaults to ``Settings.log_dir``.
        console_enabled: Whether to output to console.
    """
    log_dir = Path(log_dir) if log_dir else get_settings().log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    # Re-init replaces handlers rather than stacking them
    root_logger.handlers.clear()

    if console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    root_logger.addHandler(_rotating_handler(log_dir / MAIN_LOG_NAME, level, formatter))

    history_logger = logging.getLogger(HISTORY_LOGGER)
    for handler in list(history_logger.handlers):
        history_logger.removeHandler(handler)
        handler.close()
    history_logger.setLevel(min(level, logging.INFO))
    history_logger.addHandler(_rotating_handler(log_dir / HISTORY_LOG_NAME, logging.INFO, formatter))

    logging.getLogger(__name__).debug("Logging initialized: level=%s, dir=%s", level, log_dir)
