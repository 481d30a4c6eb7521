"""
================================================================================
Journey Tools Common Utilities
================================================================================

Shared logging setup and filesystem helpers.

Exports:
    - init_logger: Initialize loguru with standard settings (idempotent)
    - ensure_directory: Create a directory if missing

Usage:
    from journey_tools.common import init_logger

    init_logger(level="DEBUG", log_file="test-results/logs/run.log")

================================================================================
"""

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger


DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

# ============================================================
# Logging Setup
# ============================================================

_logger_initialized = False


def init_logger(
    level: str = "INFO",
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format_string: Log format string. Uses default if not provided.
        log_file: Optional file path to write logs to.
        rotation: Rotation policy for the file sink
        retention: Retention policy for the file sink

    Example:
        init_logger()  # Use defaults
        init_logger(level="DEBUG", log_file="logs/journeys.log")
    """
    global _logger_initialized

    if _logger_initialized:
        return

    logger.remove()

    format_string = format_string or DEFAULT_FORMAT
    level = level.upper()

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    if log_file:
        ensure_directory(Path(log_file).parent)
        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation=rotation,
            retention=retention,
        )

    _logger_initialized = True
    logger.debug("Logger initialized successfully")


# ============================================================
# Common Utilities
# ============================================================

def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensures a directory exists, creating it if necessary.

    Returns:
        The path (for chaining)
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


__all__ = [
    "init_logger",
    "ensure_directory",
]
