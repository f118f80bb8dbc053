"""Unit tests for logging utilities."""

import logging

from ncvguard.core import RoutePointStamped
from ncvguard.utils import get_logger, log_path


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger(self):
        """Test getting a logger instance."""
        logger = get_logger("test_logger")
        assert logger is not None
        assert logger.name == "test_logger"


class TestLogPath:
    """Tests for log_path function."""

    def test_logs_size_at_info(self, caplog):
        logger = get_logger("test_log_path_info")
        points = [RoutePointStamped(1.0, 0.0, 0.0), RoutePointStamped(2.0, 0.0, 0.1)]

        with caplog.at_level(logging.INFO, logger="test_log_path_info"):
            log_path(logger, "host plan", points)

        assert "Found 2 stamped route points for the host plan" in caplog.text
        assert "RoutePointStamped" not in caplog.text

    def test_logs_points_at_debug(self, caplog):
        logger = get_logger("test_log_path_debug")
        points = [RoutePointStamped(1.0, 0.0, 0.0)]

        with caplog.at_level(logging.DEBUG, logger="test_log_path_debug"):
            log_path(logger, "host plan", iter(points))

        assert "Found 1 stamped route points" in caplog.text
        assert "RoutePointStamped(downtrack=1.0" in caplog.text
