"""Error handler for retrykit.

Turns failures into user-facing messages and wraps operations with retry
plus fallback handling.
"""

from typing import Any, Callable, Optional

from retrykit.core.errors import error_message
from retrykit.core.execution.error_classifier import ErrorClassifier
from retrykit.core.execution.retry_executor import Operation, with_retry
from retrykit.core.logging import logger
from retrykit.core.retry_config import RetryConfigLike

RETRY_SUGGESTION = " You can try again in a few moments."

Notifier = Callable[[str], Any]
ErrorCallback = Callable[[BaseException, str], Any]


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def handle_error_with_retry(
    error: Optional[BaseException],
    custom_message: Optional[str] = None,
    notify: Optional[Notifier] = None,
) -> str:
    """Log an error and build the message to show the user.

    Args:
        error: The failure (None is treated as an unknown error)
        custom_message: Message to use instead of the classified one
        notify: Called with the final message (e.g., a toast or flash helper)

    Returns:
        The message that was chosen
    """
    classification = ErrorClassifier.classify(error)

    logger.error(
        "application_error",
        error_type=classification.type.value,
        error=error_message(error) if error is not None else None,
    )

    message = custom_message or classification.user_message
    if classification.should_retry and not custom_message:
        message += RETRY_SUGGESTION

    if notify:
        notify(message)

    return message


async def execute_with_error_handling(
    operation: Operation,
    operation_name: str = "operation",
    retry_config: RetryConfigLike = None,
    on_error: Optional[ErrorCallback] = None,
    notify: Optional[Notifier] = None,
    fallback: Any = MISSING,
) -> Any:
    """Run an operation with retry, reporting the final failure to the user.

    Args:
        operation: Zero-argument callable to run through with_retry
        operation_name: Label used in diagnostics
        retry_config: RetryConfig or mapping of overrides
        on_error: Called with (error, message) after a final failure
        notify: Passed to handle_error_with_retry
        fallback: Value returned instead of raising (None is a valid fallback)

    Returns:
        The operation's result, or fallback after a final failure

    Raises:
        The operation's original exception when no fallback is given
    """
    try:
        return await with_retry(operation, retry_config, operation_name)
    except Exception as error:
        message = handle_error_with_retry(error, notify=notify)

        if on_error:
            on_error(error, message)

        if fallback is not MISSING:
            logger.info("returning_fallback_value", operation=operation_name)
            return fallback

        raise
