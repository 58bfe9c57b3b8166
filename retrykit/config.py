"""Configuration management for retrykit.

Centralizes all environment variable access for better testability and maintainability.
"""

import os
from typing import Optional


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


class Config:
    """Application configuration loaded from environment variables."""

    # Backend API
    @staticmethod
    def api_base_url() -> str:
        """Get backend base URL from environment."""
        return os.getenv("API_BASE_URL") or "http://localhost:5010/api"

    @staticmethod
    def api_timeout() -> float:
        """Get per-request HTTP timeout in seconds."""
        return _float_env("API_TIMEOUT", 10.0)

    @staticmethod
    def api_token() -> Optional[str]:
        """Get bearer token for the backend API."""
        return os.environ.get("API_TOKEN")

    # Logging
    @staticmethod
    def log_level() -> str:
        """Get log level name (DEBUG, INFO, WARNING, ERROR)."""
        return (os.getenv("LOG_LEVEL") or "INFO").upper()

    # Retry defaults
    @staticmethod
    def retry_max_retries() -> int:
        """Get the number of retries after the first attempt."""
        return _int_env("RETRY_MAX_RETRIES", 3)

    @staticmethod
    def retry_initial_delay() -> float:
        """Get the base delay before the first retry, in seconds."""
        return _float_env("RETRY_INITIAL_DELAY", 1.0)

    @staticmethod
    def retry_max_delay() -> float:
        """Get the upper bound on any retry delay, in seconds."""
        return _float_env("RETRY_MAX_DELAY", 30.0)

    @staticmethod
    def retry_backoff_multiplier() -> float:
        """Get the growth factor applied to the delay per attempt."""
        return _float_env("RETRY_BACKOFF_MULTIPLIER", 2.0)


# Singleton instance for easy access
config = Config()
