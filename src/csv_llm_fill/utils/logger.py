"""Logging configuration for csv-llm-fill."""
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: str = 'INFO', log_file: Optional[Path] = None) -> None:
    """
    Configure root logging for a run.

    Log records always go to stderr so that stdout carries only progress
    and results.

    Args:
        level: Log level name (e.g. 'INFO', 'DEBUG')
        log_file: Optional path for an additional rotating log file
    """
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10485760,  # 10MB
            backupCount=5,
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers)
