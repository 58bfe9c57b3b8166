"""Execution module for retrykit.

Provides the retry loop, error classification and error handling helpers.
"""

from retrykit.core.execution.error_classifier import (
    ErrorClassifier,
    classify_network_error,
    is_retryable,
)
from retrykit.core.execution.error_handler import (
    execute_with_error_handling,
    handle_error_with_retry,
)
from retrykit.core.execution.observers import AttemptOutcome, RetryStats, log_attempt
from retrykit.core.execution.retry_executor import RetryExecutor, calculate_delay, with_retry

__all__ = [
    "ErrorClassifier",
    "classify_network_error",
    "is_retryable",
    "execute_with_error_handling",
    "handle_error_with_retry",
    "AttemptOutcome",
    "RetryStats",
    "log_attempt",
    "RetryExecutor",
    "calculate_delay",
    "with_retry",
]
