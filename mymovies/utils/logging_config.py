"""
Logging configuration for the MyMovies service.

The API process and the maintenance scripts share one format: a stdout
handler and, when a file name is given, a size-rotated file under
``logs/``. HTTP client and SQL engine loggers are held at WARNING so
request-level chatter does not drown out the service's own messages.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(threadName)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

NOISY_LOGGERS = ('urllib3', 'requests', 'httpx', 'sqlalchemy.engine')


def _parse_level(level: str) -> int:
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    log_file: Optional[str] = None,
    level: str = "INFO",
    log_dir: str = "logs",
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5
) -> None:
    """
    Configure the root logger.

    Args:
        log_file: File name inside ``log_dir``; None logs to stdout only
        level: Level name; unknown names fall back to INFO
        log_dir: Directory for log files (created if missing)
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files to keep
    """
    numeric_level = _parse_level(level)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path / log_file,
            maxBytes=max_bytes,
            backupCount=backup_count
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        root_logger.info("Logging to file: %s", log_path / log_file)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_script_logging(debug: bool = False) -> None:
    """Console-only logging for the command line scripts."""
    setup_logging(log_file=None, level="DEBUG" if debug else "INFO")
