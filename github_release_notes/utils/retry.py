"""Retry policy for remote calls that may hit rate limits or transient failures.

A call is attempted up to ``max_retries + 1`` times. Rate limit errors wait
until the advertised reset time (plus one second); server errors, network
failures and timeouts back off exponentially with jitter. Any other error
propagates on the first attempt.
"""

import asyncio
import functools
import inspect
import random
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

import structlog

from github_release_notes.github.exceptions import RETRYABLE_ERRORS, RateLimitExceededError
from github_release_notes.utils.constants import DEFAULT_BASE_DELAY, DEFAULT_JITTER, DEFAULT_MAX_RETRIES

logger = structlog.get_logger(__name__)

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


@dataclass(frozen=True)
class RetryPolicy:
    """Settings for retrying remote calls."""

    max_retries: int = DEFAULT_MAX_RETRIES
    base_delay: float = DEFAULT_BASE_DELAY
    jitter: float = DEFAULT_JITTER

    def backoff_delay(self, attempt: int, rng: Callable[[], float] = random.random) -> float:
        """Exponential backoff delay for the given retry number (1-based), with jitter applied."""
        delay = self.base_delay * (2 ** (attempt - 1))
        factor = 1 + self.jitter * (2 * rng() - 1)
        return delay * factor

    def retry_delay(
        self,
        error: Exception,
        attempt: int,
        clock: Callable[[], float] = time.time,
        rng: Callable[[], float] = random.random,
    ) -> float:
        """Delay before the given retry, honoring the reset time of rate limit errors."""
        if isinstance(error, RateLimitExceededError) and error.reset_at is not None:
            until_reset = error.reset_at.timestamp() - clock()
            if until_reset > 0:
                return until_reset + 1
        return self.backoff_delay(attempt, rng)


DEFAULT_RETRY_POLICY = RetryPolicy()


async def execute_with_retry(
    call: Callable[[], Awaitable[T]],
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    *,
    sleep: Callable[[float], Awaitable[Any]] | None = None,
    clock: Callable[[], float] | None = None,
    rng: Callable[[], float] | None = None,
    name: str | None = None,
) -> T:
    """Await ``call()``, retrying rate limits and transient failures according to ``policy``.

    Args:
        call: Zero-argument coroutine function performing the remote call.
        policy: Retry settings.
        sleep: Coroutine used to wait between attempts (defaults to asyncio.sleep).
        clock: Returns the current UNIX timestamp (defaults to time.time).
        rng: Returns a float in [0, 1) used for jitter (defaults to random.random).
        name: Name of the call for log events.

    Returns:
        The result of the first successful attempt.

    Raises:
        RemoteCallError: The last retryable error once retries are exhausted.
        Exception: Any non-retryable error, on the first attempt it occurs.
    """
    sleep = sleep or asyncio.sleep
    clock = clock or time.time
    rng = rng or random.random
    function = name or getattr(call, "__name__", "remote call")
    attempt = 0
    while True:
        try:
            return await call()
        except RETRYABLE_ERRORS as e:
            attempt += 1
            if attempt > policy.max_retries:
                logger.error(
                    "Max retries reached for remote call",
                    function=function,
                    attempts=attempt,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise

            delay = policy.retry_delay(e, attempt, clock=clock, rng=rng)
            logger.warning(
                f"Remote call failed (attempt {attempt}/{policy.max_retries}), retrying in {delay:.1f} seconds",
                function=function,
                attempt=attempt,
                max_retries=policy.max_retries,
                delay=delay,
                error_type=type(e).__name__,
                error=str(e),
            )
            await sleep(delay)


def retry_on_transient_errors(policy: RetryPolicy = DEFAULT_RETRY_POLICY) -> Callable[[F], F]:
    """Decorator applying :func:`execute_with_retry` to an async function.

    Example:
        @retry_on_transient_errors()
        async def get_repository(self):
            return await self.client.rest.repos.async_get(owner=self.owner, repo=self.repo_name)
    """

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"Function {func.__name__} decorated with @retry_on_transient_errors must be async.")

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            return await execute_with_retry(lambda: func(*args, **kwargs), policy, name=func.__name__)

        return async_wrapper  # type: ignore

    return decorator
