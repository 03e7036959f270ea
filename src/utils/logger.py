"""
Logging utilities for the combinations service.

All loggers live under the "combinations" package logger.
"""

import logging
from typing import Dict, Optional

import colorlog

ROOT_LOGGER_NAME = "combinations"
DEFAULT_FORMAT = "%(log_color)s%(levelname)-8s%(reset)s %(asctime)s %(blue)s%(name)s%(reset)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_loggers: Dict[str, logging.Logger] = {}
_configured = False


def setup_logging(level: str = "INFO", format_string: Optional[str] = None) -> None:
    """
    Configure logging for the application.

    Should be called once at application startup.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom colorlog format string
    """
    global _configured

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = colorlog.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter(format_string or DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT)
    )

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for the given module name.

    Args:
        name: Module name (typically __name__)

    Returns:
        Child of the package logger
    """
    if not _configured:
        setup_logging()

    if name.startswith("src."):
        name = name[4:]

    logger_name = name if name.startswith(ROOT_LOGGER_NAME) else f"{ROOT_LOGGER_NAME}.{name}"

    if logger_name not in _loggers:
        _loggers[logger_name] = logging.getLogger(logger_name)

    return _loggers[logger_name]


def log_exception(logger: logging.Logger, message: str, exc: Exception) -> None:
    """Log an exception with full traceback at ERROR level."""
    logger.error(f"{message}: {type(exc).__name__}: {exc}", exc_info=exc)
