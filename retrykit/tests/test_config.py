"""Unit tests for environment configuration and logging setup."""

import pytest
from retrykit.config import Config
from retrykit.core.logging import configure_logging, get_logger


class TestConfig:
    """Test environment variable accessors."""

    def test_api_settings(self, monkeypatch):
        """Test API settings are read from the environment."""
        monkeypatch.setenv("API_BASE_URL", "https://salon.example.com/api")
        monkeypatch.setenv("API_TIMEOUT", "15")
        monkeypatch.setenv("API_TOKEN", "abc")

        assert Config.api_base_url() == "https://salon.example.com/api"
        assert Config.api_timeout() == 15.0
        assert Config.api_token() == "abc"

    def test_empty_values_use_defaults(self, monkeypatch):
        """Test empty strings count as unset."""
        monkeypatch.setenv("API_TIMEOUT", "")
        monkeypatch.setenv("RETRY_MAX_DELAY", "")

        assert Config.api_timeout() == 10.0
        assert Config.retry_max_delay() == 30.0

    def test_malformed_float_raises(self, monkeypatch):
        """Test malformed numbers name the variable."""
        monkeypatch.setenv("API_TIMEOUT", "ten seconds")

        with pytest.raises(ValueError, match="API_TIMEOUT"):
            Config.api_timeout()

    def test_log_level_uppercased(self, monkeypatch):
        """Test log level is normalized."""
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert Config.log_level() == "DEBUG"


class TestLogging:
    """Test structlog configuration."""

    def test_unknown_level_raises(self):
        """Test invalid level names are rejected."""
        with pytest.raises(ValueError, match="VERBOSE"):
            configure_logging("verbose")

    def test_get_logger_returns_module_logger(self):
        """Test the shared logger is exposed."""
        assert get_logger() is not None
