"""Utility modules for NCV Guard."""

from .logging import get_logger, log_path

__all__ = ["get_logger", "log_path"]
