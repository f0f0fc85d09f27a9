"""
Centralized logging configuration.
Library code logs through here; only the CLI prints.

Handlers live on the top-level package loggers ('press' for the CLI,
'core' for the library), so a module logger such as
'core.layout.agent' reaches them by propagation.
"""
import logging
import logging.handlers
from pathlib import Path
from typing import List, Optional
from .constants import (
    LOG_LEVEL, LOG_FORMAT, LOG_FILE,
    LOG_MAX_SIZE_MB, LOG_BACKUP_COUNT
)

PACKAGE_LOGGERS = ('press', 'core')

_handlers: List[logging.Handler] = []


def _shared_handlers() -> List[logging.Handler]:
    """Console + rotating file handler, created once per process"""
    if _handlers:
        return _handlers

    # Console handler - INFO level
    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    _handlers.append(console)

    # File handler with rotation - DEBUG level
    log_path = Path(LOG_FILE)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        LOG_FILE,
        maxBytes=LOG_MAX_SIZE_MB * 1024 * 1024,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8',
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    _handlers.append(file_handler)

    return _handlers


def setup_logger(name: str = None) -> logging.Logger:
    """
    Get or create a configured logger.

    Usage:
        from config.logging_config import setup_logger
        logger = setup_logger("press")
        logger.info("Message here")

    Args:
        name: Logger name. If None, uses 'press'. Dotted names get their
            handlers from the top-level package logger.

    Returns:
        Configured logging.Logger instance.
    """
    name = name or 'press'
    root_name = name.split('.')[0]
    package_logger = logging.getLogger(root_name)

    # Avoid adding handlers multiple times
    if not package_logger.handlers:
        package_logger.setLevel(getattr(logging, LOG_LEVEL))
        for handler in _shared_handlers():
            package_logger.addHandler(handler)

    return logging.getLogger(name)


def get_logger(name: str = None) -> logging.Logger:
    """
    Alias for setup_logger for convenience.

    Usage:
        from config.logging_config import get_logger
        logger = get_logger(__name__)
    """
    return setup_logger(name)


def set_level(level: Optional[str]) -> None:
    """Apply one level name (DEBUG, INFO, ...) to every package logger"""
    if not level:
        return
    for name in PACKAGE_LOGGERS:
        setup_logger(name).setLevel(level.upper())


# Singleton logger for quick imports
# Usage: from config.logging_config import logger
logger = setup_logger('press')
