"""Retry executor for retrykit.

Runs an operation with exponential backoff and jitter on transient failures.
"""

import asyncio
import inspect
import math
import random
from typing import Any, Awaitable, Callable, Optional

from retrykit.core.execution.error_classifier import ErrorClassifier
from retrykit.core.execution.observers import AttemptObserver, AttemptOutcome, log_attempt
from retrykit.core.logging import logger
from retrykit.core.retry_config import RetryConfig, RetryConfigLike, merge_config

Operation = Callable[[], Any]
Sleep = Callable[[float], Awaitable[Any]]

_default_rng = random.Random()


def calculate_delay(
    attempt_number: int, config: RetryConfig, rng: Optional[random.Random] = None
) -> float:
    """Calculate the delay before the retry following attempt_number.

    delay = min(initial_delay * backoff_multiplier ^ attempt_number * U[0.5, 1.0), max_delay)

    Args:
        attempt_number: 0-based index of the attempt that just failed
        config: RetryConfig with delay settings
        rng: Random source with a random() method, module default if None

    Returns:
        Delay in seconds, between 0 and config.max_delay
    """
    if attempt_number < 0:
        raise ValueError(f"attempt_number must be >= 0, got {attempt_number}")

    rng = rng or _default_rng
    max_delay = float(config.max_delay)
    try:
        exponential = float(config.initial_delay) * (float(config.backoff_multiplier) ** attempt_number)
    except OverflowError:
        return max_delay
    if not math.isfinite(exponential):
        return max_delay

    jittered = exponential * (0.5 + rng.random() * 0.5)
    return min(jittered, max_delay)


class RetryExecutor:
    """Executes operations with automatic retry on transient failures.

    Holds the injectable pieces of the retry loop (config, random source,
    observer, sleep). Keeps no per-call state, so one executor can serve
    concurrent callers.
    """

    def __init__(
        self,
        config: RetryConfigLike = None,
        *,
        rng: Optional[random.Random] = None,
        observer: Optional[AttemptObserver] = log_attempt,
        sleep: Optional[Sleep] = None,
    ):
        """Initialize RetryExecutor.

        Args:
            config: RetryConfig or mapping of overrides merged over the defaults
            rng: Random source for jitter
            observer: Called with an AttemptOutcome after every attempt
            sleep: Coroutine function used to wait between attempts
        """
        self.config = merge_config(config)
        self.rng = rng or _default_rng
        self.observer = observer
        self.sleep = sleep or asyncio.sleep

    async def run(self, operation: Operation, operation_name: str = "operation") -> Any:
        """Execute operation, retrying transient failures.

        The operation is called with no arguments; if it returns an awaitable
        the result is awaited. Non-retryable errors and the error of the last
        allowed attempt are re-raised unchanged.

        Args:
            operation: Zero-argument callable (usually an async function)
            operation_name: Label used in diagnostics

        Returns:
            Whatever the operation returned on its first successful attempt
        """
        config = self.config

        for attempt in range(config.max_attempts):
            try:
                result = operation()
                if inspect.isawaitable(result):
                    result = await result
            except Exception as error:
                if attempt < config.max_retries and ErrorClassifier.is_retryable(error, config):
                    delay = calculate_delay(attempt, config, self.rng)
                    self._notify(
                        AttemptOutcome(operation_name, attempt, config.max_attempts, False, error, delay)
                    )
                    await self.sleep(delay)
                    continue

                self._notify(
                    AttemptOutcome(operation_name, attempt, config.max_attempts, False, error)
                )
                raise

            self._notify(AttemptOutcome(operation_name, attempt, config.max_attempts, True))
            return result

        # Unreachable: the last attempt either returns or raises
        raise RuntimeError(f"{operation_name} exited the retry loop without a result")

    def _notify(self, outcome: AttemptOutcome) -> None:
        if self.observer is None:
            return
        try:
            self.observer(outcome)
        except Exception as e:
            logger.warning(
                "retry_observer_failed",
                operation=outcome.operation_name,
                error=str(e),
            )


async def with_retry(
    operation: Operation,
    config: RetryConfigLike = None,
    operation_name: str = "operation",
    *,
    rng: Optional[random.Random] = None,
    observer: Optional[AttemptObserver] = log_attempt,
    sleep: Optional[Sleep] = None,
) -> Any:
    """Execute an operation with exponential backoff retry.

    Example:
        user = await with_retry(lambda: client.get("/users/1"), {"max_retries": 5})

    Args:
        operation: Zero-argument callable returning a value or an awaitable
        config: RetryConfig or mapping of overrides merged over the defaults
        operation_name: Label used in diagnostics
        rng: Random source for jitter
        observer: Called with an AttemptOutcome after every attempt
        sleep: Coroutine function used to wait between attempts

    Returns:
        Result of the first successful attempt

    Raises:
        The operation's own exception when it is not retryable or the
        attempt budget is spent
    """
    executor = RetryExecutor(config, rng=rng, observer=observer, sleep=sleep)
    return await executor.run(operation, operation_name)
