# COMPONENT: CENTRALIZED LOGGING CONFIGURATION
# REQUIREMENTS SATISFIED: timestamped failure logging, environment-controlled verbosity
"""
greenery_api/utils/logging.py

Provides the centralized logging configuration for the greenery service.
This module configures a shared package logger ("greenery_api") whose
behavior is controlled by the LOG_LEVEL and LOG_FILE values parsed into
Settings (greenery_api.config). Every module logger in the service is a
child of it (e.g. "greenery_api.storage") so a single configuration covers
the whole process.

Settings:
    LOG_LEVEL:
        0 → Silent (no logs emitted)
        1 → INFO level logging (default)
        2 → DEBUG level logging

    LOG_FILE:
        Optional path to a log file. If provided and valid, logs are written
        to this file. Otherwise, logs fall back to standard error (stderr).

Design Decisions:
    - Logging is isolated from the root logger to prevent duplicate output
      when running under uvicorn, which configures its own handlers.
    - Existing handlers are cleared on setup so calling it again (tests,
      reloads) never stacks handlers.
"""
import sys
import logging
from typing import Optional

LOGGER_NAME = "greenery_api"
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def setup_logger(log_level: int = 1, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures and returns the package logger.

    main.py passes the LOG_LEVEL / LOG_FILE values parsed into Settings.
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Prevent logs from being propagated to the root logger
    logger.propagate = False

    if log_level == 1:
        logger.setLevel(logging.INFO)
    elif log_level >= 2:
        logger.setLevel(logging.DEBUG)
    else:
        # For LOG_LEVEL=0, set a level that will not log anything
        logger.setLevel(logging.CRITICAL + 1)

    if logger.hasHandlers():
        logger.handlers.clear()

    handler = None
    if log_file and log_level > 0:
        try:
            handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError:
            # Unwritable path, fall back to console
            handler = logging.StreamHandler(sys.stderr)
    elif log_level > 0:
        handler = logging.StreamHandler(sys.stderr)

    if handler:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger, e.g. get_logger("storage")."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
