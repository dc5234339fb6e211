"""Exponential backoff for Password Safe API calls.

Only technical failures are retried. A call that returns
Failure(BusinessError) (or any non-technical error) ends the loop after one
invocation; an unexpected exception propagates unchanged.

The wait before retry n is

    min(initial * multiplier ** (n - 1), max_interval)

randomized by +/- randomization_factor. The loop stops before a sleep that
would cross the elapsed-time budget and returns the last technical failure.
"""

import random
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_result,
    stop_after_attempt,
    stop_before_delay,
)
from tenacity.wait import wait_base

from passwordsafe.core.constants import (
    RETRY_INITIAL_INTERVAL_SECONDS,
    RETRY_MAX_ELAPSED_TIME_SECONDS,
    RETRY_MAX_INTERVAL_SECONDS,
    RETRY_MULTIPLIER,
    RETRY_RANDOMIZATION_FACTOR,
)
from passwordsafe.core.errors import DomainError
from passwordsafe.core.result import Failure, Result
from passwordsafe.domain.protocols import LoggerProtocol

if TYPE_CHECKING:
    from passwordsafe.core.config import PasswordSafeSettings


class wait_randomized_exponential(wait_base):  # noqa: N801 - tenacity naming
    """Exponential wait with proportional jitter."""

    def __init__(
        self,
        *,
        initial: float,
        multiplier: float,
        max_interval: float,
        randomization_factor: float,
    ) -> None:
        self.initial = initial
        self.multiplier = multiplier
        self.max_interval = max_interval
        self.randomization_factor = randomization_factor

    def interval(self, attempt_number: int) -> float:
        """Un-randomized wait after `attempt_number` attempts."""
        return min(
            self.initial * self.multiplier ** (attempt_number - 1),
            self.max_interval,
        )

    def __call__(self, retry_state: RetryCallState) -> float:
        interval = self.interval(retry_state.attempt_number)
        delta = self.randomization_factor * interval
        return random.uniform(interval - delta, interval + delta)


def _is_retryable_failure(result: Any) -> bool:
    return (
        isinstance(result, Failure)
        and isinstance(result.error, DomainError)
        and result.error.is_retryable
    )


class RetryPolicy:
    """Retry budget shared by every call of a session.

    The policy holds only parameters; each `execute()` builds its own
    `AsyncRetrying`, so concurrent callers never share timer state.

    Attributes:
        initial_interval: Wait before the first retry, in seconds.
        multiplier: Growth factor per attempt.
        randomization_factor: Jitter fraction (0..1).
        max_interval: Cap on a single wait, in seconds.
        max_elapsed_time: Total budget for one call, in seconds.
        max_attempts: Optional hard cap on attempts.
    """

    def __init__(
        self,
        *,
        initial_interval: float = RETRY_INITIAL_INTERVAL_SECONDS,
        multiplier: float = RETRY_MULTIPLIER,
        randomization_factor: float = RETRY_RANDOMIZATION_FACTOR,
        max_interval: float = RETRY_MAX_INTERVAL_SECONDS,
        max_elapsed_time: float = RETRY_MAX_ELAPSED_TIME_SECONDS,
        max_attempts: int | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self.initial_interval = initial_interval
        self.multiplier = multiplier
        self.randomization_factor = randomization_factor
        self.max_interval = max_interval
        self.max_elapsed_time = max_elapsed_time
        self.max_attempts = max_attempts
        self._logger = logger or structlog.get_logger(__name__)

    @classmethod
    def from_settings(
        cls,
        settings: "PasswordSafeSettings",
        *,
        logger: LoggerProtocol | None = None,
    ) -> "RetryPolicy":
        return cls(
            initial_interval=settings.retry_initial_interval_seconds,
            multiplier=settings.retry_multiplier,
            randomization_factor=settings.retry_randomization_factor,
            max_interval=settings.retry_max_interval_seconds,
            max_elapsed_time=settings.retry_max_elapsed_time_seconds,
            logger=logger,
        )

    @property
    def wait(self) -> wait_randomized_exponential:
        return wait_randomized_exponential(
            initial=self.initial_interval,
            multiplier=self.multiplier,
            max_interval=self.max_interval,
            randomization_factor=self.randomization_factor,
        )

    def _retrying(self, operation: str) -> AsyncRetrying:
        stop = stop_before_delay(self.max_elapsed_time)
        if self.max_attempts is not None:
            stop = stop | stop_after_attempt(self.max_attempts)

        def _before_sleep(retry_state: RetryCallState) -> None:
            error = retry_state.outcome.result().error if retry_state.outcome else None
            self._logger.warning(
                "Retrying after technical error",
                operation=operation,
                attempt=retry_state.attempt_number,
                sleep_seconds=round(retry_state.upcoming_sleep, 3),
                error=str(error),
            )

        return AsyncRetrying(
            wait=self.wait,
            stop=stop,
            retry=retry_if_result(_is_retryable_failure),
            before_sleep=_before_sleep,
            retry_error_callback=lambda retry_state: retry_state.outcome.result(),
            reraise=True,
        )

    async def execute[T, E](
        self,
        call: Callable[[], Awaitable[Result[T, E]]],
        *,
        operation: str,
    ) -> Result[T, E]:
        """Run `call` until it stops returning a technical failure.

        Args:
            call: Zero-argument coroutine function returning a Result.
            operation: Operation name for logging.

        Returns:
            The first non-technical result, or the last technical failure
            once the elapsed-time budget is spent.
        """
        return await self._retrying(operation)(call)
