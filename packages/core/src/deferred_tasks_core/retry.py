"""RetryPolicy and Retrier: bounded retry of transient failures."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import TYPE_CHECKING, TypeVar, Union

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")

RetryableSpec = Union[
    type[BaseException],
    tuple[type[BaseException], ...],
    "Callable[[BaseException], bool]",
]

logger = logging.getLogger(__name__)


class RetryPolicy:
    """Configurable retry with exponential backoff and jitter."""

    def __init__(
        self,
        *,
        max_attempts: int = 3,
        base_delay: float = 0.1,
        max_delay: float = 5.0,
        jitter: bool = True,
    ) -> None:
        """Configure retry behavior.

        Args:
            max_attempts: Maximum number of attempts (including the first).
            base_delay: Initial delay in seconds before the first retry.
            max_delay: Cap on delay in seconds.
            jitter: If True, add random jitter to delays to avoid thundering herd.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if base_delay < 0 or max_delay < 0:
            raise ValueError("base_delay and max_delay must be >= 0")
        if base_delay > max_delay:
            raise ValueError("base_delay must be <= max_delay")
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.jitter = jitter

    def should_retry(self, attempt: int) -> bool:
        """Return True if another attempt is allowed (attempt is 1-based)."""
        return 1 <= attempt < self.max_attempts

    def delay_for_attempt(self, attempt: int) -> float:
        """Return delay in seconds after the given 1-based failed attempt.

        Uses exponential backoff: base_delay * 2^(attempt-1), capped by max_delay.
        If jitter is enabled, multiplies by a random factor in [0.5, 1.5].
        """
        if attempt < 1:
            return 0.0
        delay = min(
            self.base_delay * (2 ** (attempt - 1)),
            self.max_delay,
        )
        if self.jitter:
            delay = delay * (0.5 + random.random())  # noqa: S311
        return float(max(0.0, delay))


def _as_predicate(retryable: RetryableSpec) -> Callable[[BaseException], bool]:
    if isinstance(retryable, tuple) or (
        isinstance(retryable, type) and issubclass(retryable, BaseException)
    ):
        types = retryable
        return lambda exc: isinstance(exc, types)
    return retryable


class Retrier:
    """Runs an async operation, retrying it while it fails with a retryable kind.

    The retrier knows nothing about queues; callers say which failures are
    transient by passing an exception type, a tuple of types, or a predicate.
    Any other failure propagates after a single attempt. When attempts run
    out, the last failure is re-raised unchanged.

    Usage::

        retrier = Retrier(RetryPolicy(max_attempts=5))
        await retrier.call_with_retry(
            lambda: queue.submit(task), TransientQueueError
        )
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        *,
        sleep: Callable[[float], Awaitable[object]] | None = None,
    ) -> None:
        self._policy = policy or RetryPolicy()
        self._sleep = sleep or asyncio.sleep

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    async def call_with_retry(
        self,
        fn: Callable[[], Awaitable[T]],
        retryable: RetryableSpec,
    ) -> T:
        is_retryable = _as_predicate(retryable)
        attempt = 1
        while True:
            try:
                return await fn()
            except Exception as e:
                if not is_retryable(e) or not self._policy.should_retry(attempt):
                    raise
                delay = self._policy.delay_for_attempt(attempt)
                logger.warning(
                    "Retrying after transient failure (attempt %d of %d, "
                    "sleeping %.3fs): %s",
                    attempt,
                    self._policy.max_attempts,
                    delay,
                    e,
                )
                if delay > 0:
                    await self._sleep(delay)
                attempt += 1
