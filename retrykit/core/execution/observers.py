"""Attempt observers for retrykit.

The retry loop reports every attempt to an observer instead of logging
directly. log_attempt is the default observer; RetryStats collects counters
for monitoring.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from retrykit.core.errors import error_message
from retrykit.core.logging import logger


@dataclass(frozen=True)
class AttemptOutcome:
    """Result of a single invocation inside a retry loop."""

    operation_name: str
    attempt: int  # 0-based
    max_attempts: int
    succeeded: bool
    error: Optional[BaseException] = None
    delay: Optional[float] = None  # seconds before the next attempt

    @property
    def will_retry(self) -> bool:
        """True when the attempt failed and another one is scheduled."""
        return not self.succeeded and self.delay is not None

    @property
    def attempt_number(self) -> int:
        """1-based attempt number, for display."""
        return self.attempt + 1


AttemptObserver = Callable[[AttemptOutcome], Any]


def log_attempt(outcome: AttemptOutcome) -> None:
    """Write a structured log event for an attempt."""
    if outcome.succeeded:
        if outcome.attempt > 0:
            logger.info(
                "operation_succeeded_after_retry",
                operation=outcome.operation_name,
                attempts=outcome.attempt_number,
            )
        else:
            logger.debug("operation_succeeded", operation=outcome.operation_name)
        return

    if outcome.will_retry:
        logger.warning(
            "operation_retry_scheduled",
            operation=outcome.operation_name,
            attempt=outcome.attempt_number,
            max_attempts=outcome.max_attempts,
            delay_seconds=round(outcome.delay, 3),
            error=error_message(outcome.error),
        )
        return

    logger.error(
        "operation_failed",
        operation=outcome.operation_name,
        attempts=outcome.attempt_number,
        error_type=type(outcome.error).__name__,
        error=error_message(outcome.error),
    )


class RetryStats:
    """Track retry statistics for monitoring and debugging.

    Attributes:
        total_attempts: Every invocation observed
        successful_retries: Successes that needed at least one retry
        failed_retries: Final failures that followed at least one retry
        last_error: Most recent error
    """

    def __init__(self) -> None:
        self.total_attempts: int = 0
        self.successful_retries: int = 0
        self.failed_retries: int = 0
        self.last_error: Optional[BaseException] = None

    def __call__(self, outcome: AttemptOutcome) -> None:
        self.total_attempts += 1
        if outcome.succeeded:
            if outcome.attempt > 0:
                self.successful_retries += 1
            return

        self.last_error = outcome.error
        if not outcome.will_retry and outcome.attempt > 0:
            self.failed_retries += 1

    def reset(self) -> None:
        """Reset all statistics."""
        self.total_attempts = 0
        self.successful_retries = 0
        self.failed_retries = 0
        self.last_error = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary."""
        return {
            "total_attempts": self.total_attempts,
            "successful_retries": self.successful_retries,
            "failed_retries": self.failed_retries,
            "last_error": str(self.last_error) if self.last_error else None,
        }
