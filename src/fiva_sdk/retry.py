"""Bounded retries for idempotent remote reads."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_RETRY_DELAY = 2.0


def _retry_everything(exc: BaseException) -> bool:
    return True


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to try, how long to wait and which errors to retry.

    ``backoff`` multiplies the delay after every failed attempt; 1.0 keeps it
    fixed.
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    delay: float = DEFAULT_RETRY_DELAY
    backoff: float = 1.0
    retry_on: Callable[[BaseException], bool] = field(default=_retry_everything)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay < 0:
            raise ValueError("delay must be non-negative")
        if self.backoff < 1:
            raise ValueError("backoff must be >= 1")

    def delay_for(self, attempt: int) -> float:
        """Delay to wait after the given (1-based) failed attempt."""

        return self.delay * self.backoff ** (attempt - 1)


class RetryObserver(Protocol):
    """Receives structured retry events."""

    def on_retry(
        self, operation: str, attempt: int, max_attempts: int, error: Exception, delay: float
    ) -> None: ...

    def on_give_up(self, operation: str, attempts: int, error: Exception) -> None: ...


class LoggingRetryObserver:
    """Default observer writing retry events to the module logger."""

    def on_retry(
        self, operation: str, attempt: int, max_attempts: int, error: Exception, delay: float
    ) -> None:
        logger.warning(
            "%s failed (attempt %s/%s): %s. Retry in %.1fs",
            operation,
            attempt,
            max_attempts,
            error,
            delay,
        )

    def on_give_up(self, operation: str, attempts: int, error: Exception) -> None:
        logger.error("%s failed after %s attempt(s): %s", operation, attempts, error)


DEFAULT_RETRY_POLICY = RetryPolicy()


def _operation_name(operation: Callable[..., Any]) -> str:
    return getattr(operation, "__qualname__", None) or repr(operation)


async def with_retries(
    operation: Callable[..., Awaitable[T]],
    *args: Any,
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    observer: RetryObserver | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    **kwargs: Any,
) -> T:
    """Await ``operation(*args, **kwargs)`` until it succeeds or the policy gives up.

    Intermediate failures are reported to ``observer`` and swallowed. The
    last failure, or the first one ``policy.retry_on`` rejects, is re-raised
    unmodified. Only wrap reads: resubmitting a state-changing message is
    the caller's decision.
    """
    events = observer or LoggingRetryObserver()
    name = _operation_name(operation)

    for attempt in range(1, policy.max_attempts + 1):
        try:
            return await operation(*args, **kwargs)
        except Exception as exc:
            if attempt == policy.max_attempts or not policy.retry_on(exc):
                events.on_give_up(name, attempt, exc)
                raise

            delay = policy.delay_for(attempt)
            events.on_retry(name, attempt, policy.max_attempts, exc, delay)
            await sleep(delay)

    raise AssertionError("unreachable")  # pragma: no cover


class RetryExecutor:
    """Bind a retry policy, observer and sleep function for repeated use."""

    def __init__(
        self,
        policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        *,
        observer: RetryObserver | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.policy = policy
        self._observer = observer
        self._sleep = sleep

    async def __call__(
        self, operation: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any
    ) -> T:
        return await with_retries(
            operation,
            *args,
            policy=self.policy,
            observer=self._observer,
            sleep=self._sleep,
            **kwargs,
        )
