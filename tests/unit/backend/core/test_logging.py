"""
Unit Tests for Centralized Logging.

Tests the logging configuration, structured fields, and source handling.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture(autouse=True)
def _reset_logging_config():
    from invoice_relay.backend.core import logging as logging_module

    logging_module._logging_config = None
    yield
    logging_module._logging_config = None


class TestValidSources:
    """Tests for VALID_SOURCES constant."""

    def test_valid_sources_contains_expected_values(self):
        from invoice_relay.backend.core.logging import VALID_SOURCES

        expected = frozenset({"web", "cli", "form", "relay", "telegram", "internal", "unknown"})
        assert VALID_SOURCES == expected

    def test_frontends_are_valid_sources(self):
        from invoice_relay.backend.core.logging import VALID_SOURCES
        from invoice_relay.backend.core.middleware import KNOWN_FRONTENDS

        assert KNOWN_FRONTENDS <= VALID_SOURCES


class TestLoggingConfigLoading:
    """Tests for logging configuration loading from YAML."""

    def test_reads_project_logging_yaml(self):
        from invoice_relay.backend.core import logging as logging_module

        config = logging_module._load_logging_config()

        assert config["format"] in {"json", "console"}
        assert config["handlers"]["file"]["path"] == "logs/system.jsonl"

    def test_config_is_cached(self):
        from invoice_relay.backend.core import logging as logging_module

        with patch(
            "invoice_relay.backend.core.logging.load_yaml_config",
            return_value={"level": "INFO"},
        ) as mock_load:
            first = logging_module._load_logging_config()
            second = logging_module._load_logging_config()

        assert first is second
        mock_load.assert_called_once_with("logging.yaml")

    def test_raises_if_file_missing(self):
        from invoice_relay.backend.core import logging as logging_module

        with patch(
            "invoice_relay.backend.core.logging.load_yaml_config",
            side_effect=FileNotFoundError("Configuration file not found: logging.yaml"),
        ):
            with pytest.raises(FileNotFoundError, match="logging.yaml"):
                logging_module._load_logging_config()


class TestSetupLogging:
    """Tests for setup_logging function."""

    @pytest.fixture
    def mock_logging_config(self):
        return {
            "level": "INFO",
            "format": "json",
            "handlers": {
                "console": {"enabled": True},
                "file": {
                    "enabled": False,
                    "path": "logs/system.jsonl",
                    "max_bytes": 10485760,
                    "backup_count": 5,
                },
            },
        }

    def test_uses_config_defaults(self, mock_logging_config):
        from invoice_relay.backend.core.logging import setup_logging

        with patch(
            "invoice_relay.backend.core.logging._load_logging_config",
            return_value=mock_logging_config,
        ):
            setup_logging()

        assert logging.getLogger().level == logging.INFO

    def test_override_takes_precedence(self, mock_logging_config):
        from invoice_relay.backend.core.logging import setup_logging

        with patch(
            "invoice_relay.backend.core.logging._load_logging_config",
            return_value=mock_logging_config,
        ):
            setup_logging(level="DEBUG", format_type="console")

        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG
        assert "StreamHandler" in [type(h).__name__ for h in root_logger.handlers]

    def test_file_logging_adds_rotating_handler(self, tmp_path, mock_logging_config):
        from invoice_relay.backend.core.logging import setup_logging

        log_file = tmp_path / "logs" / "system.jsonl"

        with patch(
            "invoice_relay.backend.core.logging._load_logging_config",
            return_value=mock_logging_config,
        ), patch(
            "invoice_relay.backend.core.logging._resolve_log_path",
            return_value=log_file,
        ):
            setup_logging(enable_file_logging=True)

        handler_types = [type(h).__name__ for h in logging.getLogger().handlers]
        assert "RotatingFileHandler" in handler_types
        assert log_file.parent.is_dir()

        for handler in logging.getLogger().handlers[:]:
            if type(handler).__name__ == "RotatingFileHandler":
                handler.close()
                logging.getLogger().removeHandler(handler)

    def test_http_client_loggers_are_quieted(self, mock_logging_config):
        """httpx logs request URLs, and Telegram URLs embed the bot token."""
        from invoice_relay.backend.core.logging import setup_logging

        with patch(
            "invoice_relay.backend.core.logging._load_logging_config",
            return_value=mock_logging_config,
        ):
            setup_logging(level="DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING


class TestGetLogger:
    def test_returns_structlog_logger(self):
        from invoice_relay.backend.core.logging import get_logger

        logger = get_logger("test.module")
        assert hasattr(logger, "bind")
        assert hasattr(logger, "info")


class TestLogWithSource:
    """Tests for log_with_source helper function."""

    def test_adds_source_field(self):
        from invoice_relay.backend.core.logging import log_with_source

        logger = MagicMock()

        log_with_source(logger, "relay", "info", "Message relayed", chat_id="-100123")

        logger.info.assert_called_once_with("Message relayed", source="relay", chat_id="-100123")

    def test_level_is_case_insensitive(self):
        from invoice_relay.backend.core.logging import log_with_source

        logger = MagicMock()

        log_with_source(logger, "telegram", "WARNING", "Slow reply")

        logger.warning.assert_called_once_with("Slow reply", source="telegram")

    def test_invalid_level_raises(self):
        from invoice_relay.backend.core.logging import log_with_source

        logger = MagicMock(spec=["info"])

        with pytest.raises(AttributeError):
            log_with_source(logger, "relay", "verbose", "nope")
