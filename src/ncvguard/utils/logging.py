"""Logging utilities for NCV Guard."""

import logging
from typing import Iterable

# Configure Python logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def log_path(logger: logging.Logger, label: str, points: Iterable) -> None:
    """Log the size of a stamped path at INFO and each point at DEBUG.

    Args:
        logger: Logger to write to
        label: Description of the path (e.g. "host plan")
        points: Stamped route points
    """
    points = list(points)
    logger.info(f"Found {len(points)} stamped route points for the {label}")
    if logger.isEnabledFor(logging.DEBUG):
        for point in points:
            logger.debug(f"{label}: {point}")
