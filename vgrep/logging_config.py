"""
Logging Configuration
Sets up the package logger for the application.

The terminal carries the UI and stdout carries the filtered lines, so log
records only ever go to a file.
"""
import logging
import os
from typing import Optional

LOG_ENV_VAR = "VGREP_LOG"


def setup_logging(level: int = logging.DEBUG, log_file: Optional[str] = None) -> None:
    """
    Configures the logger for the 'vgrep' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to. Falls back to the VGREP_LOG
            environment variable; with neither, records are discarded.
    """
    logger = logging.getLogger("vgrep")
    logger.setLevel(level)
    logger.propagate = False

    # Check if handlers already exist to avoid duplicate logs on repeated setup
    if logger.hasHandlers():
        logger.handlers.clear()

    log_file = log_file or os.environ.get(LOG_ENV_VAR) or None
    if not log_file:
        logger.addHandler(logging.NullHandler())
        return

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logger.info("Logging initialized.")
