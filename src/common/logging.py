"""Structured logging configuration for the shopping optimizer."""

from __future__ import annotations

import logging
import sys


def setup_logging(
    level: int | str = logging.INFO,
    module_name: str = "src.optimizer",
) -> logging.Logger:
    """Configure and return a logger with consistent formatting.

    Args:
        level: Logging level, as int or name (default INFO).
        module_name: Name for the logger instance.

    Returns:
        Configured logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(module_name)

    if logger.handlers:
        return logger

    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
