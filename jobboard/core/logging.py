"""Logging configuration for the jobboard package.

This module provides a standardized logging configuration for the entire
jobboard package. Every component (API client, orchestrators, the jobs page,
the development backend) gets its logger from here so output is formatted
the same way.

Example:
    ```python
    from jobboard.core.logging import setup_logging

    logger = setup_logging('job_actions')
    logger.info('Fetching jobs from: /api/v1/job/getall')
    ```
"""
import logging
import os

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _level_from_env() -> int:
    level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
    return getattr(logging, level_name, logging.INFO)


def setup_logging(logger_name: str) -> logging.Logger:
    """Set up standardized logging configuration.

    Creates and configures a logger with consistent formatting and behavior.
    If the logger already has handlers, it will not be reconfigured.

    Args:
        logger_name: The name for the logger, typically the module name

    Returns:
        A configured logger instance
    """
    logger = logging.getLogger(f'jobboard.{logger_name}')

    if not logger.handlers:
        level = _level_from_env()
        logger.setLevel(level)

        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


# Make sure the root logger has a handler to avoid "no handler found" warnings
logging.getLogger().addHandler(logging.NullHandler())
