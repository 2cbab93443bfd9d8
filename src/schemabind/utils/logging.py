"""Structured logging framework using structlog.

This module provides centralized logging configuration with:
- ISO-8601 timestamps
- JSON rendering for structured logs
- Context binding support
- Optional file logging next to the stderr stream

Records go to stderr so that the JSON report written to stdout by the CLI
stays machine readable.

Configuration is loaded from schemabind.config.settings:
- LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: INFO
- LOG_TO_FILE: Enable file logging (1, true, yes). Default: disabled
- LOG_FILE_DIR: Directory for log files. Default: logs/

Usage:
    >>> from schemabind.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("generation.started", dialect="postgres", schemas=1)
"""

import logging
import os
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.types import Processor

from schemabind.config import get_settings


def _get_log_level() -> int:
    """Get log level from settings.

    Returns:
        Logging level constant (e.g., logging.INFO, logging.DEBUG)
    """
    try:
        level_name = get_settings().LOG_LEVEL.upper()
    except Exception:
        # Fallback to environment variable if settings can't be loaded
        level_name = os.getenv("LOG_LEVEL", "INFO").upper()

    return getattr(logging, level_name, logging.INFO)


def _should_log_to_file() -> bool:
    """Check if file logging is enabled via environment."""
    return os.getenv("LOG_TO_FILE", "").lower() in ("1", "true", "yes")


def _get_log_file_path() -> Path:
    """Get the log file path with date-based naming."""
    log_dir = Path(os.getenv("LOG_FILE_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    # Format: schemabind-YYYYMMDD.log
    date_str = datetime.now().strftime("%Y%m%d")
    return log_dir / f"schemabind-{date_str}.log"


def _configure_structlog() -> None:
    """Configure structlog with JSON rendering.

    Sets up:
    - ISO-8601 timestamps
    - Logger name
    - Log level
    - JSON renderer
    - stderr output (plus optional file)
    """
    level = _get_log_level()
    logging.basicConfig(format="%(message)s", level=level, handlers=[])

    stderr_handler = logging.StreamHandler()
    stderr_handler.setLevel(level)
    logging.root.addHandler(stderr_handler)

    if _should_log_to_file():
        file_handler = TimedRotatingFileHandler(
            filename=str(_get_log_file_path()),
            when="midnight",
            interval=1,
            backupCount=30,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        logging.root.addHandler(file_handler)

    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Configure structlog on module import
_configure_structlog()


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        A structlog BoundLogger configured with JSON rendering
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> Any:
    """Create a logger with bound context fields.

    Example:
        >>> logger = bind_context(dialect="mysql", mode="schema")
        >>> logger.info("generation.started", schemas=1)
    """
    return structlog.get_logger("schemabind").bind(**kwargs)
