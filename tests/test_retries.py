import pytest

from dnslookup.core.retries import AsyncRetries, NoAttemptsLeftError, lookup_retries
from dnslookup.errors import RemoteApiError, RequestExecutionError


class Flaky:
    def __init__(self, failures: int, exc: Exception) -> None:
        self.failures = failures
        self.exc = exc
        self.calls = 0

    async def __call__(self, value: str) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.exc
        return value


class TestAsyncRetries:
    def test_attempts_must_be_positive(self):
        with pytest.raises(ValueError):
            AsyncRetries(retry_on=(RuntimeError,), attempts=0)

    def test_linear_and_expo_delays(self):
        linear = AsyncRetries(retry_on=(RuntimeError,), delay=1.0)
        expo = AsyncRetries(retry_on=(RuntimeError,), delay=1.0, backoff="expo")

        assert [linear.calculate_delay(n) for n in (1, 2, 3)] == [1.0, 2.0, 3.0]
        assert [expo.calculate_delay(n) for n in (1, 2, 3)] == [1.0, 2.0, 4.0]

    def test_jitter_stays_in_bounds(self):
        retries = AsyncRetries(retry_on=(RuntimeError,), delay=1.0, jitter=0.5)
        for _ in range(20):
            assert 0.5 <= retries.calculate_delay(1) <= 1.5

    @pytest.mark.asyncio
    async def test_recovers(self):
        flaky = Flaky(2, RequestExecutionError("connection reset"))
        retries = lookup_retries(attempts=3, delay=0, jitter=0)

        assert await retries.call_with_retries(flaky, "ok") == "ok"
        assert flaky.calls == 3

    @pytest.mark.asyncio
    async def test_gives_up(self):
        cause = RequestExecutionError("connection reset")
        flaky = Flaky(5, cause)
        retries = lookup_retries(attempts=2, delay=0, jitter=0)

        with pytest.raises(NoAttemptsLeftError) as exc_info:
            await retries.call_with_retries(flaky, "ok")

        assert exc_info.value.__cause__ is cause
        assert flaky.calls == 2

    @pytest.mark.asyncio
    async def test_api_errors_are_not_retried(self):
        flaky = Flaky(1, RemoteApiError("WHOIS_01", "Invalid API key"))
        retries = lookup_retries(attempts=3, delay=0, jitter=0)

        with pytest.raises(RemoteApiError):
            await retries.call_with_retries(flaky, "ok")
        assert flaky.calls == 1

    @pytest.mark.asyncio
    async def test_decorator(self):
        flaky = Flaky(1, RuntimeError("boom"))

        @AsyncRetries(retry_on=(RuntimeError,), attempts=2, delay=0)
        async def call(value: str) -> str:
            return await flaky(value)

        assert await call("done") == "done"
        assert call.__name__ == "call"
