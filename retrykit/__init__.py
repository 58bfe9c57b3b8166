"""retrykit: retry with exponential backoff and jitter for async API calls.

Public API re-exported for convenience.
"""

from retrykit.core.errors import (
    ApiError,
    GenericError,
    HttpStatusError,
    NetworkError,
    RequestTimeoutError,
    from_transport_error,
)
from retrykit.core.execution import (
    AttemptOutcome,
    ErrorClassifier,
    RetryExecutor,
    RetryStats,
    calculate_delay,
    classify_network_error,
    execute_with_error_handling,
    handle_error_with_retry,
    is_retryable,
    with_retry,
)
from retrykit.core.retry_config import DEFAULT_RETRY_CONFIG, ErrorType, RetryConfig, merge_config
from retrykit.models import ApiResponse, ClassifiedError
from retrykit.utils.decorators import create_retryable_api_call, retryable

__all__ = [
    # Configuration
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "merge_config",
    "ErrorType",
    # Retry loop
    "RetryExecutor",
    "with_retry",
    "calculate_delay",
    "AttemptOutcome",
    "RetryStats",
    "create_retryable_api_call",
    "retryable",
    # Classification
    "ErrorClassifier",
    "is_retryable",
    "classify_network_error",
    "ClassifiedError",
    "handle_error_with_retry",
    "execute_with_error_handling",
    # Errors
    "ApiError",
    "NetworkError",
    "RequestTimeoutError",
    "HttpStatusError",
    "GenericError",
    "from_transport_error",
    "ApiResponse",
]
