"""Tests for structured logging setup."""

import structlog

from storefront.infrastructure.logging_config import configure_logging


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_json_renderer(self):
        """Test JSON output is the default renderer."""
        configure_logging(level="INFO")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer(self):
        """Test the console renderer can be selected."""
        configure_logging(level="DEBUG", json=False)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_unknown_level_falls_back_to_info(self):
        """Test unknown level names do not raise."""
        configure_logging(level="chatty")

        structlog.get_logger("storefront.test").info("Configured", requested="chatty")
        assert structlog.get_config()["wrapper_class"] is structlog.stdlib.BoundLogger
