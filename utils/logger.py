"""
Logging configuration for the application.

Console output goes to stderr; stdout is reserved for command results.
"""
import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(
    name: str = "workload", level: int = logging.INFO, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and configure a logger.

    Calling it again for the same name adjusts the level of the existing
    handlers and adds a file handler if a new log file is given.

    Args:
        name: Logger name
        level: Logging level for the logger and its handlers
        log_file: Optional file that receives a copy of every record

    Returns:
        logging.Logger: The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)

    if log_file:
        log_path = os.path.abspath(log_file)
        has_file = any(
            isinstance(h, logging.FileHandler) and h.baseFilename == log_path
            for h in logger.handlers
        )
        if not has_file:
            directory = os.path.dirname(log_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(file_handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger


# Default logger for the application
logger = setup_logger()
