"""Error classifier for retrykit.

Classifies errors for retry decisions and user-facing messages.
"""

from typing import Optional

from retrykit.core.errors import (
    CONNECTION_ERROR_CODES,
    HttpStatusError,
    error_code,
    error_message,
    error_status,
)
from retrykit.core.retry_config import DEFAULT_RETRY_CONFIG, ErrorType, RetryConfig
from retrykit.models.classification import ClassifiedError

UNKNOWN_ERROR_MESSAGE = "An unexpected error occurred. Please try again."
NETWORK_ERROR_MESSAGE = (
    "Unable to connect to the server. Please check your internet connection and try again."
)
TIMEOUT_MESSAGE = "The request is taking longer than expected. Please try again."
SERVER_ERROR_MESSAGE = "The server is temporarily unavailable. Please try again in a few moments."
RATE_LIMIT_MESSAGE = "Too many requests. Please wait a moment and try again."
CLIENT_ERROR_MESSAGE = "Invalid request. Please check your input and try again."


class ErrorClassifier:
    """Classifies errors for retry decisions and presentation.

    Static methods for stateless classification.
    """

    @staticmethod
    def is_retryable(error: BaseException, config: Optional[RetryConfig] = None) -> bool:
        """Decide whether the retry loop should try again after this error.

        The checks are independent: any one of them passing makes the error
        retryable.

        Args:
            error: Exception raised by the operation
            config: RetryConfig with retryable statuses and message fragments

        Returns:
            True if the error is transient
        """
        config = config or DEFAULT_RETRY_CONFIG

        message = error_message(error).lower()
        if message and any(fragment in message for fragment in config.network_error_messages):
            return True

        status = error_status(error)
        if status is not None and status in config.retryable_status_codes:
            return True

        # Fixed set, not affected by config
        return error_code(error) in CONNECTION_ERROR_CODES

    @staticmethod
    def classify(error: Optional[BaseException]) -> ClassifiedError:
        """Map an error to a type, user message and retry hint.

        First match wins:
        network connectivity, timeout, 5xx, 429, other 4xx, unknown.

        Args:
            error: Exception to classify (None allowed)

        Returns:
            ClassifiedError
        """
        if error is None:
            return ClassifiedError(
                type=ErrorType.UNKNOWN,
                user_message=UNKNOWN_ERROR_MESSAGE,
                should_retry=False,
            )

        code = error_code(error)
        status = error_status(error)

        if "network error" in error_message(error).lower() or code in ("ECONNREFUSED", "ENOTFOUND"):
            return ClassifiedError(
                type=ErrorType.NETWORK_CONNECTIVITY,
                user_message=NETWORK_ERROR_MESSAGE,
                should_retry=True,
            )

        if code == "ETIMEDOUT" or status == 408:
            return ClassifiedError(
                type=ErrorType.TIMEOUT,
                user_message=TIMEOUT_MESSAGE,
                should_retry=True,
            )

        if status is not None and status >= 500:
            return ClassifiedError(
                type=ErrorType.SERVER_ERROR,
                user_message=SERVER_ERROR_MESSAGE,
                should_retry=True,
            )

        if status == 429:
            return ClassifiedError(
                type=ErrorType.RATE_LIMIT,
                user_message=RATE_LIMIT_MESSAGE,
                should_retry=True,
            )

        if status is not None and 400 <= status < 500:
            return ClassifiedError(
                type=ErrorType.CLIENT_ERROR,
                user_message=ErrorClassifier.server_message(error) or CLIENT_ERROR_MESSAGE,
                should_retry=False,
            )

        return ClassifiedError(
            type=ErrorType.UNKNOWN,
            user_message=UNKNOWN_ERROR_MESSAGE,
            should_retry=True,
        )

    @staticmethod
    def server_message(error: BaseException) -> Optional[str]:
        """Extract the message the server put in an error body, if any.

        Accepts both ``{"error": "..."}`` and the envelope form
        ``{"success": false, "error": {"code": ..., "message": "..."}}``.
        """
        if not isinstance(error, HttpStatusError) or not isinstance(error.data, dict):
            return None

        body_error = error.data.get("error")
        if isinstance(body_error, str) and body_error:
            return body_error
        if isinstance(body_error, dict):
            message = body_error.get("message")
            if isinstance(message, str) and message:
                return message
        return None


def is_retryable(error: BaseException, config: Optional[RetryConfig] = None) -> bool:
    """Module-level shortcut for ErrorClassifier.is_retryable."""
    return ErrorClassifier.is_retryable(error, config)


def classify_network_error(error: Optional[BaseException]) -> ClassifiedError:
    """Module-level shortcut for ErrorClassifier.classify."""
    return ErrorClassifier.classify(error)
