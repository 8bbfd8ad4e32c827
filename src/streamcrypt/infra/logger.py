"""
Logging setup for the command-line entry point.

Library modules only create loggers via ``logging.getLogger(__name__)``;
handlers are attached here, once, by the application.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "streamcrypt"
LOG_FILENAME = "streamcrypt.log"

_CONSOLE_FORMAT = "%(levelname)s: %(message)s"
_FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_handlers: list[logging.Handler] = []


def setup_logging(
    level: str | int = "INFO",
    log_dir: str | Path | None = None,
    *,
    max_bytes: int = 1_048_576,
    backup_count: int = 3,
) -> logging.Logger:
    """Configure the package logger.

    Calling this again replaces the handlers installed by a previous call.

    Args:
        level: Log level name (``"DEBUG"``, ``"INFO"``, ...) or number.
        log_dir: Optional directory for a rotating ``streamcrypt.log`` file.
        max_bytes: Rotate the log file after this many bytes.
        backup_count: Number of rotated log files to keep.

    Returns:
        The configured ``streamcrypt`` logger.

    Raises:
        ValueError: If ``level`` is not a known log level name.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    logger = logging.getLogger(LOGGER_NAME)
    for h in _handlers:
        logger.removeHandler(h)
        h.close()
    _handlers.clear()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    _handlers.append(console)

    if log_dir:
        path = Path(log_dir).expanduser()
        path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path / LOG_FILENAME,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        _handlers.append(file_handler)

    for h in _handlers:
        logger.addHandler(h)
    logger.setLevel(level)
    return logger
