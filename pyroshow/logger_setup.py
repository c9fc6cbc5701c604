"""
Logging setup for PyroShow.

The show logs through a dedicated "pyroshow" logger rather than the root
logger, so pygame and other libraries keep their own output.
"""
import logging
from typing import Optional

LOGGER_NAME = "pyroshow"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(level: int | str = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Configure the "pyroshow" logger.

    Args:
        level: Logging level name or number
        log_file: Optional path; logs are also written there

    Returns:
        The configured logger. Calling again replaces its handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT)

    # Clear existing handlers to avoid duplication if this function is called again
    if logger.hasHandlers():
        logger.handlers.clear()

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug(f"Logging initialized at level {logging.getLevelName(logger.level)}")
    return logger
