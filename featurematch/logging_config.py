"""
Logging configuration for the featurematch recommendation engine.

Every module logs through a logger under the "featurematch" hierarchy. Handlers
and levels come from config.py, output goes to stderr so that the stdio MCP
transport stays clean, and the server can retarget levels or add a log file
after the module loggers already exist.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Iterator, Optional

from .config import config

ROOT_LOGGER_NAME = "featurematch"


def _qualified_name(name: str) -> str:
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return name
    return f"{ROOT_LOGGER_NAME}.{name}"


def _featurematch_loggers() -> Iterator[logging.Logger]:
    for name, existing in list(logging.Logger.manager.loggerDict.items()):
        if isinstance(existing, logging.Logger) and _qualified_name(name) == name:
            yield existing


def _rotating_file_handler(log_file: str, formatter: logging.Formatter) -> logging.handlers.RotatingFileHandler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=config.logging.LOG_MAX_SIZE,
        backupCount=config.logging.LOG_BACKUP_COUNT,
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    name: str = ROOT_LOGGER_NAME,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Return the featurematch logger for a name, configuring it on first use.

    Names outside the featurematch hierarchy are placed under it, so
    "task_analyzer" and "featurematch.task_analyzer" are the same logger.
    A logger that already has handlers is returned untouched.

    Args:
        name: Module or logger name
        log_level: Override log level from config
        log_file: Override log file from config
    """
    logger = logging.getLogger(_qualified_name(name))
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, (log_level or config.logging.LOG_LEVEL).upper()))
    formatter = logging.Formatter(config.logging.LOG_FORMAT)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)

    file_path = log_file or config.logging.LOG_FILE
    if file_path:
        logger.addHandler(_rotating_file_handler(file_path, formatter))

    # Handlers live on each module logger
    logger.propagate = False
    return logger


def set_log_level(log_level: str) -> None:
    """Change the level of every featurematch logger created so far."""
    level = getattr(logging, log_level.upper())
    for logger in _featurematch_loggers():
        logger.setLevel(level)


def add_log_file(log_file: str) -> logging.Handler:
    """Send every configured featurematch logger to a rotating log file as well."""
    file_handler = _rotating_file_handler(log_file, logging.Formatter(config.logging.LOG_FORMAT))
    for logger in _featurematch_loggers():
        if logger.handlers and not any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers):
            logger.addHandler(file_handler)
    return file_handler


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, usually called with __name__."""
    return setup_logging(name)
