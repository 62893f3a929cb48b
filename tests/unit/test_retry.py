from unittest.mock import AsyncMock, call

import pytest
from playwright.async_api import Error as PlaywrightError

from scenarios.retry import RetryPolicy

pytestmark = pytest.mark.unit


class TestRetryPolicyValidation:
    def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=0)

    def test_rejects_negative_backoff(self):
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=2, backoff_ms=-1)

    def test_is_immutable(self):
        policy = RetryPolicy(max_attempts=2)
        with pytest.raises(AttributeError):
            policy.max_attempts = 5


class TestRetryPolicyRun:
    async def test_returns_first_success_without_waiting(self, page):
        action = AsyncMock(return_value="ok")

        result = await RetryPolicy(max_attempts=3, backoff_ms=500).run(page, action)

        assert result == "ok"
        action.assert_awaited_once()
        page.wait_for_timeout.assert_not_awaited()

    async def test_retries_transient_error_with_backoff(self, page):
        action = AsyncMock(side_effect=[PlaywrightError("occluded"), AssertionError("hidden"), "ok"])

        result = await RetryPolicy(max_attempts=3, backoff_ms=250).run(page, action)

        assert result == "ok"
        assert action.await_count == 3
        assert page.wait_for_timeout.await_args_list == [call(250), call(250)]

    async def test_raises_last_error_when_attempts_exhausted(self, page):
        errors = [PlaywrightError("first"), PlaywrightError("second")]
        action = AsyncMock(side_effect=errors)

        with pytest.raises(PlaywrightError, match="second"):
            await RetryPolicy(max_attempts=2, backoff_ms=100).run(page, action)

        # brak czekania po ostatniej próbie
        assert page.wait_for_timeout.await_count == 1

    async def test_zero_backoff_never_waits(self, page):
        action = AsyncMock(side_effect=[PlaywrightError("x"), "ok"])

        await RetryPolicy(max_attempts=2).run(page, action)

        page.wait_for_timeout.assert_not_awaited()

    async def test_uses_fallback_after_exhaustion(self, page):
        action = AsyncMock(side_effect=PlaywrightError("timeout"))
        fallback = AsyncMock(return_value="fallback")

        result = await RetryPolicy(max_attempts=2, use_fallback=True).run(page, action, fallback=fallback)

        assert result == "fallback"
        assert action.await_count == 2
        fallback.assert_awaited_once()

    async def test_fallback_ignored_when_policy_disallows_it(self, page):
        action = AsyncMock(side_effect=PlaywrightError("timeout"))
        fallback = AsyncMock()

        with pytest.raises(PlaywrightError):
            await RetryPolicy(max_attempts=1).run(page, action, fallback=fallback)

        fallback.assert_not_awaited()

    async def test_non_transient_error_propagates_immediately(self, page):
        action = AsyncMock(side_effect=ValueError("bug"))
        fallback = AsyncMock()

        with pytest.raises(ValueError):
            await RetryPolicy(max_attempts=3, backoff_ms=10, use_fallback=True).run(
                page, action, fallback=fallback
            )

        action.assert_awaited_once()
        fallback.assert_not_awaited()
