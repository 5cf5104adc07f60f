"""Logging configuration for autoselect using loguru.

autoselect is embedded in host applications that may configure loguru
themselves, so only the handlers installed here are ever removed, and they
only receive records emitted from the ``autoselect`` package.
"""

import os
import sys
from loguru import logger
from typing import Optional

from autoselect.utils import get_project_root

LOG_LEVEL_ENV = "AUTOSELECT_LOG_LEVEL"
LOG_FILE_ENV = "AUTOSELECT_LOG_FILE"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} - {message}"

# Handler ids added by setup_logger; nothing else is touched on reconfiguration
_handler_ids: list[int] = []


def _resolve_log_file(log_file: str) -> str:
    if os.path.isabs(log_file):
        return log_file
    return os.path.join(get_project_root(), log_file)


def setup_logger(
    log_file: Optional[str] = None,
    log_level: str = "INFO",
    rotation: str = "10 MB",
    retention: str = "7 days",
    compression: str = "zip",
    console_output: bool = False,
) -> list[int]:
    """
    (Re)install the autoselect log handlers.

    Args:
        log_file: Path of a rotating log file; relative paths are resolved
            against the project root. No file handler when None.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        rotation: Log rotation size
        retention: How long to keep old logs
        compression: Compression format for old logs
        console_output: Whether to also log to stderr

    Returns:
        The ids of the handlers now installed
    """
    while _handler_ids:
        logger.remove(_handler_ids.pop())

    if console_output:
        _handler_ids.append(
            logger.add(
                sys.stderr,
                level=log_level,
                format=CONSOLE_FORMAT,
                filter="autoselect",
                colorize=True,
            )
        )

    if log_file is not None:
        _handler_ids.append(
            logger.add(
                _resolve_log_file(log_file),
                level=log_level,
                format=FILE_FORMAT,
                filter="autoselect",
                rotation=rotation,
                retention=retention,
                compression=compression,
                encoding="utf-8",
            )
        )

    return list(_handler_ids)


def configure_from_env() -> list[int]:
    """Install handlers as described by ``AUTOSELECT_LOG_FILE`` / ``AUTOSELECT_LOG_LEVEL``."""
    return setup_logger(
        log_file=os.environ.get(LOG_FILE_ENV) or None,
        log_level=os.environ.get(LOG_LEVEL_ENV, "INFO").upper(),
        console_output=False,
    )


def get_logger(name: Optional[str] = None):
    """
    Get a logger bound to an autoselect component name.

    Args:
        name: Component name shown in the ``name`` column

    Returns:
        Logger instance
    """
    return logger.bind(name=name or "autoselect")


configure_from_env()
