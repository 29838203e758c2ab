"""Unit Tests for the retry combinator."""

import asyncio
from unittest.mock import AsyncMock, call

import pytest

from src.services.doc_routing import SelectionExhaustedError, TransientSelectionError, linear_backoff, with_retry


class TestWithRetry:
    """Attempt accounting and error propagation."""

    @pytest.mark.asyncio
    async def test_returns_first_success(self):
        attempt = AsyncMock(return_value="ok")
        sleep = AsyncMock()

        result = await with_retry(attempt, max_attempts=3, backoff=linear_backoff(1), sleep=sleep)

        assert result == "ok"
        attempt.assert_awaited_once_with(1)
        sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_exhaustion_raises_with_last_error(self):
        """Test that the last failure is kept on the exhausted error."""
        errors = [TransientSelectionError("one"), TransientSelectionError("two")]
        attempt = AsyncMock(side_effect=errors)
        sleep = AsyncMock()

        with pytest.raises(SelectionExhaustedError) as exc_info:
            await with_retry(attempt, max_attempts=2, backoff=linear_backoff(0.5), sleep=sleep)

        assert exc_info.value.attempts == 2
        assert exc_info.value.last_error is errors[1]
        assert exc_info.value.__cause__ is errors[1]
        assert sleep.await_args_list == [call(0.5)]

    @pytest.mark.asyncio
    async def test_attempt_numbers_passed(self):
        attempt = AsyncMock(side_effect=[ValueError("x"), ValueError("y"), "done"])

        result = await with_retry(attempt, max_attempts=3, backoff=linear_backoff(0), sleep=AsyncMock())

        assert result == "done"
        assert attempt.await_args_list == [call(1), call(2), call(3)]

    @pytest.mark.asyncio
    async def test_unlisted_errors_propagate(self):
        """Test that errors outside retry_on are not retried."""
        attempt = AsyncMock(side_effect=KeyError("boom"))

        with pytest.raises(KeyError):
            await with_retry(
                attempt, max_attempts=3, backoff=linear_backoff(0),
                retry_on=(TransientSelectionError,), sleep=AsyncMock(),
            )

        assert attempt.await_count == 1

    @pytest.mark.asyncio
    async def test_cancellation_during_backoff(self):
        """Test that cancelling the task aborts a pending backoff wait."""
        attempt = AsyncMock(side_effect=TransientSelectionError("down"))

        task = asyncio.create_task(with_retry(attempt, max_attempts=3, backoff=linear_backoff(60)))
        await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert attempt.await_count == 1

    @pytest.mark.asyncio
    async def test_zero_attempts_rejected(self):
        with pytest.raises(ValueError):
            await with_retry(AsyncMock(), max_attempts=0, backoff=linear_backoff(0))

    def test_linear_backoff(self):
        backoff = linear_backoff(0.5)

        assert [backoff(n) for n in (1, 2, 3)] == [0.5, 1.0, 1.5]
