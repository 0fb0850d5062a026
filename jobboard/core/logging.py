"""Logging configuration for the jobboard package.

This module provides a standardized logging configuration for the entire
jobboard package so that the auth, job and application components all log
with the same format.

Example:
    ```python
    from jobboard.core.logging import setup_logging

    logger = setup_logging('applications')
    logger.info('Application submitted')
    ```
"""
import logging

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(logger_name: str, level: int = logging.INFO) -> logging.Logger:
    """Set up standardized logging configuration.

    If the logger already has handlers, it will not be reconfigured.

    Args:
        logger_name: The name for the logger, typically the module name
        level: Log level for the logger and its console handler

    Returns:
        A configured logger instance
    """
    logger = logging.getLogger(f"jobboard.{logger_name}")

    if not logger.handlers:
        logger.setLevel(level)

        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


# Make sure the root logger has a handler to avoid "no handler found" warnings
logging.getLogger().addHandler(logging.NullHandler())
