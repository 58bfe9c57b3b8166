"""Retry decorators for retrykit.

Wrap API call functions so every invocation goes through with_retry.
"""

import functools
from typing import Any, Callable

from retrykit.core.execution.retry_executor import with_retry
from retrykit.core.retry_config import RetryConfigLike

ANONYMOUS_CALL_NAME = "API call"


def _call_name(func: Callable) -> str:
    name = getattr(func, "__name__", None)
    if not name or name == "<lambda>":
        return ANONYMOUS_CALL_NAME
    return name


def create_retryable_api_call(api_call: Callable, config: RetryConfigLike = None) -> Callable:
    """Wrap an API call function with retry logic.

    Args:
        api_call: Function to wrap (async, or sync returning a value)
        config: RetryConfig or mapping of overrides

    Returns:
        Async function with the same signature that forwards every argument
        unchanged and retries transient failures
    """
    name = _call_name(api_call)

    @functools.wraps(api_call)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        return await with_retry(lambda: api_call(*args, **kwargs), config, name)

    return wrapper


def retryable(config: RetryConfigLike = None):
    """Decorator form of create_retryable_api_call.

    Example:
        @retryable({"max_retries": 5})
        async def fetch_bookings(customer_id):
            ...
    """
    def decorator(func: Callable) -> Callable:
        return create_retryable_api_call(func, config)
    return decorator
