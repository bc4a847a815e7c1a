"""
Logging configuration for the meta_parser package.

Console output goes to stderr: the run_*.py scripts print their JSON result
on stdout, and `run_search.py query > out.json` must stay valid JSON.
"""

import logging
import sys
from typing import Optional, TextIO, Union

PACKAGE_LOGGER = "meta_parser"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def level_from_name(name: Optional[str], default: int = logging.INFO) -> int:
    """Map a level name such as "debug" (e.g. from META_PARSER_LOG_LEVEL) to a logging level."""
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def _formatted(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logger(
    name: str = PACKAGE_LOGGER,
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Configure a logger with a console handler and an optional file handler.

    A logger that already has handlers is only re-leveled, so the entry
    scripts can call this again with the level they parsed.

    Args:
        name: Logger name
        level: Logging level, as a number or a name like "debug"
        log_file: Optional file path for logging
        stream: Console stream (default: sys.stderr at call time)

    Returns:
        The configured logger
    """
    if isinstance(level, str):
        level = level_from_name(level)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    logger.addHandler(_formatted(logging.StreamHandler(stream or sys.stderr), level))
    if log_file:
        logger.addHandler(_formatted(logging.FileHandler(log_file), level))

    return logger


# Package logger, configured once at import time
logger = setup_logger()


def get_module_logger(module_name: str) -> logging.Logger:
    """Child logger "meta_parser.<module_name>"; it writes through the package logger's handlers."""
    return logging.getLogger(f"{PACKAGE_LOGGER}.{module_name}")
