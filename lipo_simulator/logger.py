"""
Simulator Logging Setup

Configures the 'lipo_simulator' logger with a console handler and an optional
log file. Modules log through logging.getLogger(__name__).
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = 'lipo_simulator'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(verbose: bool = False, log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Configure simulator logging.

    Args:
        verbose: Log DEBUG messages (per-step output) instead of INFO
        log_file: Optional path of a log file to append to

    Returns:
        The configured package logger
    """
    level = logging.DEBUG if verbose else logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # Console handler for immediate feedback
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
