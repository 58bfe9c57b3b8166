"""Retry configuration for retrykit.

Immutable configuration for error retry behavior.
"""

import dataclasses
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Mapping, Optional, Union

from retrykit.config import Config


class ErrorType(str, Enum):
    """User-facing error categories produced by classify_network_error.

    - NETWORK_CONNECTIVITY: Server unreachable (connection refused, DNS failure)
    - TIMEOUT: Request took too long (ETIMEDOUT, 408)
    - SERVER_ERROR: 5xx responses
    - RATE_LIMIT: 429 responses
    - CLIENT_ERROR: Other 4xx responses (permanent)
    - UNKNOWN: Anything else
    """

    NETWORK_CONNECTIVITY = "network_connectivity"
    TIMEOUT = "timeout"
    SERVER_ERROR = "server_error"
    RATE_LIMIT = "rate_limit"
    CLIENT_ERROR = "client_error"
    UNKNOWN = "unknown"


DEFAULT_RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})

DEFAULT_NETWORK_ERROR_MESSAGES = frozenset(
    {"network error", "failed to fetch", "timeout", "econnrefused", "enotfound"}
)


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior.

    Frozen so one instance can be shared by concurrent callers.
    Delays are in seconds.
    """

    max_retries: int = 3
    initial_delay: float = 1.0  # seconds
    max_delay: float = 30.0  # cap at 30 seconds
    backoff_multiplier: float = 2.0  # exponential backoff multiplier
    retryable_status_codes: FrozenSet[int] = field(
        default_factory=lambda: DEFAULT_RETRYABLE_STATUS_CODES
    )
    network_error_messages: FrozenSet[str] = field(
        default_factory=lambda: DEFAULT_NETWORK_ERROR_MESSAGES
    )

    def __post_init__(self):
        object.__setattr__(
            self, "retryable_status_codes", frozenset(int(c) for c in self.retryable_status_codes)
        )
        object.__setattr__(
            self,
            "network_error_messages",
            frozenset(str(m).lower() for m in self.network_error_messages),
        )

        if isinstance(self.max_retries, bool) or not isinstance(self.max_retries, int):
            raise ValueError(f"max_retries must be an integer, got {self.max_retries!r}")
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        for name in ("initial_delay", "max_delay", "backoff_multiplier"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number, got {value!r}")
        if self.initial_delay <= 0:
            raise ValueError(f"initial_delay must be positive, got {self.initial_delay}")
        if self.max_delay < self.initial_delay:
            raise ValueError(
                f"max_delay ({self.max_delay}) must be >= initial_delay ({self.initial_delay})"
            )
        if self.backoff_multiplier <= 1:
            raise ValueError(
                f"backoff_multiplier must be greater than 1, got {self.backoff_multiplier}"
            )

    @property
    def max_attempts(self) -> int:
        """Total invocations allowed: the first attempt plus every retry."""
        return self.max_retries + 1

    @classmethod
    def from_env(cls) -> "RetryConfig":
        """Build a config from RETRY_* environment variables."""
        return cls(
            max_retries=Config.retry_max_retries(),
            initial_delay=Config.retry_initial_delay(),
            max_delay=Config.retry_max_delay(),
            backoff_multiplier=Config.retry_backoff_multiplier(),
        )


DEFAULT_RETRY_CONFIG = RetryConfig()

RetryConfigLike = Union[RetryConfig, Mapping[str, Any], None]

_FIELD_NAMES = frozenset(f.name for f in dataclasses.fields(RetryConfig))


def merge_config(
    overrides: RetryConfigLike = None, base: Optional[RetryConfig] = None
) -> RetryConfig:
    """Merge caller overrides over a base config.

    Without an explicit base the defaults come from RETRY_* environment
    variables (see RetryConfig.from_env), falling back to DEFAULT_RETRY_CONFIG
    values for unset ones.

    Args:
        overrides: None, a complete RetryConfig, or a mapping of field names
            to values. Mapping values win over the base.
        base: Config to merge into, RetryConfig.from_env() if None

    Returns:
        New RetryConfig (the inputs are never modified)

    Raises:
        ValueError: Unknown field name or an override that breaks an invariant
    """
    base = base or RetryConfig.from_env()

    if overrides is None:
        return base
    if isinstance(overrides, RetryConfig):
        return overrides

    unknown = set(overrides) - _FIELD_NAMES
    if unknown:
        raise ValueError(f"Unknown retry config field(s): {', '.join(sorted(unknown))}")

    return dataclasses.replace(base, **dict(overrides))
