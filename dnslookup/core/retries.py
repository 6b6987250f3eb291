'''
Opt-in retries for callers of the lookup client. The client itself never
retries, wrap a call (or a coroutine function) with `AsyncRetries` when
transient failures should be tried again.
'''
from __future__ import annotations

import asyncio
import functools
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Literal, ParamSpec, TypeVar

from loguru import logger

from dnslookup.errors import DnsLookupError, RequestExecutionError, ResponseReadError


class NoAttemptsLeftError(DnsLookupError): ...


P = ParamSpec("P")
R = TypeVar("R")


@dataclass(slots=True)
class AsyncRetries:
    '''
    A decorator that retries a coroutine function on the exceptions
    passed as `retry_on`, any other exception propagates at once.

    When all attempts are exhausted, a NoAttemptsLeftError is raised from
    the last failure.

    Parameters
    ----------
    retry_on : tuple[type[BaseException], ...]
        _The exceptions to retry on_
    attempts : int
        _The number of attempts to make_
    delay : float
        _The initial delay between attempts in seconds_
    jitter : float
        _The jitter factor to apply to the delay_
    backoff : Literal["linear", "expo"]
        _The backoff strategy to use_
    '''
    retry_on: tuple[type[BaseException], ...]
    attempts: int = 3
    delay: float = 0.25
    jitter: float = 0.0
    backoff: Literal["linear", "expo"] = "linear"

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError("attempts must be at least 1")

    def calculate_delay(self, attempt_no: int) -> float:
        if self.backoff == "linear":
            base = self.delay * attempt_no
        else:
            base = self.delay * (2 ** (attempt_no - 1))

        if self.jitter:
            j = base * self.jitter
            base += random.uniform(-j, j)
        return max(0.0, base)

    async def call_with_retries(
        self, func: Callable[P, Awaitable[R]], *args: P.args, **kwargs: P.kwargs
    ) -> R:
        """
        Awaits `func(*args, **kwargs)` until it succeeds or the attempts
        run out.

        Raises
        ------
        NoAttemptsLeftError
        """
        last_exc: BaseException | None = None
        for attempt_no in range(1, self.attempts + 1):
            try:
                return await func(*args, **kwargs)
            except self.retry_on as exc:
                logger.warning(
                    "Attempt {}/{} failed: {}", attempt_no, self.attempts, exc
                )
                if attempt_no == self.attempts:
                    raise NoAttemptsLeftError(
                        f"Failed after {self.attempts} attempts: {exc}"
                    ) from exc
                last_exc = exc
                await asyncio.sleep(self.calculate_delay(attempt_no))

        raise NoAttemptsLeftError(
            f"Failed after {self.attempts} attempts"
        ) from last_exc

    def __call__(
        self,
        func: Callable[P, Awaitable[R]],
    ) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            return await self.call_with_retries(func, *args, **kwargs)

        return wrapper


def lookup_retries(
    *,
    attempts: int = 3,
    delay: float = 0.5,
    jitter: float = 0.1,
) -> AsyncRetries:
    '''
    Retries on the failures worth trying again: the request could not be
    sent or the body was cut off. API errors, bad statuses and parse
    errors are not retried.
    '''
    return AsyncRetries(
        attempts=attempts,
        delay=delay,
        jitter=jitter,
        backoff="expo",
        retry_on=(
            RequestExecutionError,
            ResponseReadError,
        ),
    )
