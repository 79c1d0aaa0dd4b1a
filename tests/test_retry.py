"""Tests for the retry combinator."""

import pytest

from tubescribe.errors import AuthError, RefusalError, TransientProviderError
from tubescribe.utils.retry import retry_with_backoff


def _flaky(failures, result="ok", error=TransientProviderError):
    attempts = []

    async def operation():
        attempts.append(len(attempts) + 1)
        if len(attempts) <= failures:
            raise error(f"attempt {len(attempts)} failed")
        return result

    return operation, attempts


class TestRetryWithBackoff:
    @pytest.mark.asyncio
    async def test_succeeds_first_time(self, fake_sleep, sleeps):
        operation, attempts = _flaky(0)
        assert await retry_with_backoff(operation, sleep=fake_sleep) == "ok"
        assert attempts == [1]
        assert sleeps == []

    @pytest.mark.asyncio
    async def test_exponential_delays(self, fake_sleep, sleeps):
        operation, attempts = _flaky(2, error=RefusalError)
        result = await retry_with_backoff(operation, max_attempts=3, initial_delay=1.0, sleep=fake_sleep)

        assert result == "ok"
        assert attempts == [1, 2, 3]
        assert sleeps == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_exhaustion_reraises_last_error(self, fake_sleep, sleeps):
        operation, attempts = _flaky(5)
        with pytest.raises(TransientProviderError, match="attempt 3 failed"):
            await retry_with_backoff(operation, max_attempts=3, initial_delay=0.5, sleep=fake_sleep)
        assert attempts == [1, 2, 3]
        assert sleeps == [0.5, 1.0]

    @pytest.mark.asyncio
    async def test_non_retryable_propagates(self, fake_sleep, sleeps):
        operation, attempts = _flaky(1, error=AuthError)
        with pytest.raises(AuthError):
            await retry_with_backoff(operation, sleep=fake_sleep)
        assert attempts == [1]
        assert sleeps == []
