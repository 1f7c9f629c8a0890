import logging
import sys
import os
from datetime import datetime
from typing import Optional

from sitelint.core.config import LOG_DIR

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors each line by level."""

    yellow = "\x1b[33m"
    reset = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: "\x1b[36m",
        logging.INFO: "\x1b[32m",
        logging.WARNING: yellow,
        logging.ERROR: "\x1b[31m",
        logging.CRITICAL: "\x1b[31;1m",
    }

    def __init__(self):
        super().__init__(LOG_FORMAT, datefmt=DATE_FORMAT)
        self._colored = {
            levelno: logging.Formatter(color + LOG_FORMAT + self.reset, datefmt=DATE_FORMAT)
            for levelno, color in self.LEVEL_COLORS.items()
        }

    def format(self, record):
        # Custom levels fall back to the plain format
        formatter = self._colored.get(record.levelno)
        if formatter is None:
            return super().format(record)
        return formatter.format(record)


def _resolve_level(level) -> int:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    return level if isinstance(level, int) else logging.INFO


def _daily_file_handler(log_dir: str) -> logging.FileHandler:
    os.makedirs(log_dir, exist_ok=True)
    handler = logging.FileHandler(
        os.path.join(log_dir, f"sitelint_{datetime.now().strftime('%Y%m%d')}.log"),
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(level=logging.INFO, log_dir: str = LOG_DIR) -> Optional[str]:
    """
    Route logging to a colored stderr console and a daily file in log_dir.

    Returns the log file path, or None when log_dir cannot be written and
    logging continues on the console only.
    """
    level = _resolve_level(level)
    root_logger = logging.getLogger()

    # Clear existing handlers to prevent duplicate logs
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(level)

    # Console handler on stderr, operator output stays on stdout
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ColoredFormatter())
    root_logger.addHandler(console_handler)
    logging.getLogger("sitelint").setLevel(level)

    try:
        file_handler = _daily_file_handler(log_dir)
    except OSError as e:
        root_logger.warning("Cannot write logs to %s (%s), console only.", log_dir, e)
        return None

    root_logger.addHandler(file_handler)
    root_logger.debug("Logging initialized (console + %s).", file_handler.baseFilename)
    return file_handler.baseFilename
