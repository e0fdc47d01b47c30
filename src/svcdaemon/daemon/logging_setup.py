"""Loguru logging setup for svcdaemon.

Usage:
    from .logging_setup import setup_logging, get_logger

    # At startup
    setup_logging()

    # In modules
    logger = get_logger(__name__)
    logger.info("Installed unit", path="/etc/systemd/system/foo.service")

Every operation in svcdaemon is a short, synchronous CLI call, so handlers
write directly instead of through a background queue.

Requirements:
    pip install loguru
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

from .paths import get_logs_dir

# Default console format with colors
CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

# Simple format without colors (for file output)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | "
    "{level: <8} | "
    "{name}:{function}:{line} | "
    "{message}"
)


def setup_logging(
    log_level: str | None = None,
    console: bool = True,
    file: bool = False,
    log_dir: Path | None = None,
    serialize_file: bool = False,
) -> None:
    """Configure logging with console and file handlers.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to INFO.
        console: Enable console (stderr) output.
        file: Enable file output.
        log_dir: Directory for log files (default: auto-detect using paths.py).
        serialize_file: Use JSON format for file logs.

    Example:
        >>> setup_logging()  # Console only, INFO
        >>> setup_logging(log_level="DEBUG", file=True)  # Console and file
    """
    logger.remove()

    if log_level is None:
        log_level = "INFO"

    if console:
        logger.add(
            sys.stderr,
            format=CONSOLE_FORMAT,
            level=log_level,
            colorize=True,
            backtrace=False,
            diagnose=False,
        )

    if file:
        if log_dir is None:
            log_dir = get_logs_dir()
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            str(log_dir / "svcdaemon.log"),
            level=log_level,
            format=FILE_FORMAT,
            rotation="10 MB",
            retention="7 days",
            compression="gz",
            serialize=serialize_file,
            backtrace=True,
            diagnose=False,  # SECURITY: False in production
        )


def get_logger(name: str, **context: Any) -> "logger":
    """Get a context-bound logger.

    Args:
        name: Logger name (usually __name__)
        **context: Additional context to bind to all log messages

    Returns:
        Logger instance with bound context

    Example:
        >>> logger = get_logger(__name__, service="foo")
        >>> logger.info("Starting")  # Includes service in output
    """
    return logger.bind(name=name, **context)
