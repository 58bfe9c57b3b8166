"""Unit tests for RetryConfig and merge_config."""

import dataclasses

import pytest
from retrykit.core.retry_config import (
    DEFAULT_RETRY_CONFIG,
    ErrorType,
    RetryConfig,
    merge_config,
)


class TestDefaults:
    """Test default retry settings."""

    def test_default_values(self):
        """Test defaults match the documented table."""
        config = RetryConfig()

        assert config.max_retries == 3
        assert config.max_attempts == 4
        assert config.initial_delay == 1.0
        assert config.max_delay == 30.0
        assert config.backoff_multiplier == 2.0
        assert config.retryable_status_codes == frozenset({408, 429, 500, 502, 503, 504})
        assert config.network_error_messages == frozenset(
            {"network error", "failed to fetch", "timeout", "econnrefused", "enotfound"}
        )

    def test_conflict_and_locked_not_retryable_by_default(self):
        """Test 409/423 and auth errors stay out of the default set."""
        for status in (400, 401, 403, 404, 409, 423):
            assert status not in DEFAULT_RETRY_CONFIG.retryable_status_codes

    def test_config_is_frozen(self):
        """Test config cannot be mutated after creation."""
        config = RetryConfig()

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.max_retries = 10

    def test_messages_are_lowercased(self):
        """Test message fragments are normalized to lowercase."""
        config = RetryConfig(network_error_messages=["ENOTFOUND", "Socket Hang Up"])

        assert config.network_error_messages == frozenset({"enotfound", "socket hang up"})

    def test_status_codes_normalized_to_frozenset(self):
        """Test any iterable of status codes is accepted."""
        config = RetryConfig(retryable_status_codes=[503, 503, 409])

        assert config.retryable_status_codes == frozenset({503, 409})

    def test_error_type_values(self):
        """Test ErrorType string values."""
        assert [t.value for t in ErrorType] == [
            "network_connectivity",
            "timeout",
            "server_error",
            "rate_limit",
            "client_error",
            "unknown",
        ]


class TestValidation:
    """Test invariant checks."""

    def test_negative_max_retries_raises(self):
        """Test max_retries below zero is rejected."""
        with pytest.raises(ValueError, match="max_retries"):
            RetryConfig(max_retries=-1)

    def test_zero_max_retries_allowed(self):
        """Test zero retries means a single attempt."""
        assert RetryConfig(max_retries=0).max_attempts == 1

    def test_non_integer_max_retries_raises(self):
        """Test floats and bools are rejected for max_retries."""
        with pytest.raises(ValueError, match="integer"):
            RetryConfig(max_retries=2.5)
        with pytest.raises(ValueError, match="integer"):
            RetryConfig(max_retries=True)

    def test_non_positive_initial_delay_raises(self):
        """Test initial_delay must be positive."""
        with pytest.raises(ValueError, match="initial_delay"):
            RetryConfig(initial_delay=0)

    def test_max_delay_below_initial_delay_raises(self):
        """Test max_delay must not be smaller than initial_delay."""
        with pytest.raises(ValueError, match="max_delay"):
            RetryConfig(initial_delay=5.0, max_delay=1.0)

    def test_multiplier_must_exceed_one(self):
        """Test backoff_multiplier of 1 is rejected."""
        with pytest.raises(ValueError, match="backoff_multiplier"):
            RetryConfig(backoff_multiplier=1.0)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"max_delay": float("inf")},
            {"initial_delay": float("nan")},
            {"backoff_multiplier": float("inf")},
            {"initial_delay": float("inf"), "max_delay": float("inf")},
        ],
    )
    def test_non_finite_delays_raise(self, overrides):
        """Test inf and nan delay settings are rejected."""
        with pytest.raises(ValueError, match="finite"):
            RetryConfig(**overrides)


class TestMergeConfig:
    """Test merging caller overrides over defaults."""

    def test_none_returns_defaults(self, monkeypatch):
        """Test no overrides yields the default config."""
        for name in (
            "RETRY_MAX_RETRIES",
            "RETRY_INITIAL_DELAY",
            "RETRY_MAX_DELAY",
            "RETRY_BACKOFF_MULTIPLIER",
        ):
            monkeypatch.delenv(name, raising=False)

        assert merge_config(None) == DEFAULT_RETRY_CONFIG

    def test_defaults_follow_environment(self, monkeypatch):
        """Test RETRY_* variables set the base that overrides merge onto."""
        monkeypatch.setenv("RETRY_MAX_RETRIES", "0")
        monkeypatch.setenv("RETRY_INITIAL_DELAY", "0.2")

        assert merge_config(None).max_retries == 0
        merged = merge_config({"max_delay": 2.0})
        assert merged.max_retries == 0
        assert merged.initial_delay == 0.2
        assert merged.max_delay == 2.0

    def test_mapping_overrides_win(self):
        """Test supplied fields replace defaults, others are kept."""
        config = merge_config({"max_retries": 5, "initial_delay": 0.2})

        assert config.max_retries == 5
        assert config.initial_delay == 0.2
        assert config.max_delay == DEFAULT_RETRY_CONFIG.max_delay
        assert config.retryable_status_codes == DEFAULT_RETRY_CONFIG.retryable_status_codes

    def test_merge_does_not_touch_base(self):
        """Test merging leaves the base config unchanged."""
        base = RetryConfig(max_retries=1)

        merged = merge_config({"max_retries": 7}, base=base)

        assert merged.max_retries == 7
        assert base.max_retries == 1

    def test_full_config_returned_as_is(self):
        """Test a complete RetryConfig is used unchanged."""
        config = RetryConfig(max_retries=9)

        assert merge_config(config) is config

    def test_unknown_field_raises(self):
        """Test typos in override names are reported."""
        with pytest.raises(ValueError, match="maxRetries"):
            merge_config({"maxRetries": 2})

    def test_invalid_override_raises(self):
        """Test overrides are validated like a fresh config."""
        with pytest.raises(ValueError, match="backoff_multiplier"):
            merge_config({"backoff_multiplier": 0.5})


class TestFromEnv:
    """Test building config from environment variables."""

    def test_from_env_reads_retry_variables(self, monkeypatch):
        """Test RETRY_* variables are applied."""
        monkeypatch.setenv("RETRY_MAX_RETRIES", "5")
        monkeypatch.setenv("RETRY_INITIAL_DELAY", "0.25")
        monkeypatch.setenv("RETRY_MAX_DELAY", "4")
        monkeypatch.setenv("RETRY_BACKOFF_MULTIPLIER", "3")

        config = RetryConfig.from_env()

        assert config.max_retries == 5
        assert config.initial_delay == 0.25
        assert config.max_delay == 4.0
        assert config.backoff_multiplier == 3.0

    def test_from_env_defaults(self, monkeypatch):
        """Test unset variables fall back to defaults."""
        for name in (
            "RETRY_MAX_RETRIES",
            "RETRY_INITIAL_DELAY",
            "RETRY_MAX_DELAY",
            "RETRY_BACKOFF_MULTIPLIER",
        ):
            monkeypatch.delenv(name, raising=False)

        assert RetryConfig.from_env() == DEFAULT_RETRY_CONFIG

    def test_from_env_malformed_value_raises(self, monkeypatch):
        """Test non-numeric values name the offending variable."""
        monkeypatch.setenv("RETRY_MAX_RETRIES", "three")

        with pytest.raises(ValueError, match="RETRY_MAX_RETRIES"):
            RetryConfig.from_env()
