"""Property-based tests for the retry policy.

Exponential backoff:
- Delay follows initial_delay * base ** attempt until capped
- Delay never exceeds max_delay
- Only transport failures and 5xx responses are retryable
"""

from __future__ import annotations

import math

import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from yenipara_sdk.config import RetryConfig
from yenipara_sdk.core.retry import RetryPolicy, should_retry_status
from yenipara_sdk.types import HttpFailure, Success, TransportFailure

initial_delay_strategy = st.floats(min_value=0.1, max_value=10.0)
max_delay_strategy = st.floats(min_value=10.0, max_value=300.0)
exponential_base_strategy = st.floats(min_value=1.5, max_value=3.0)
attempt_strategy = st.integers(min_value=0, max_value=10)


class TestBackoffProperties:
    """Property tests for backoff delays."""

    @given(
        initial_delay=initial_delay_strategy,
        max_delay=max_delay_strategy,
        exponential_base=exponential_base_strategy,
        attempt=attempt_strategy,
    )
    @settings(max_examples=100)
    def test_delay_never_exceeds_max(
        self,
        initial_delay: float,
        max_delay: float,
        exponential_base: float,
        attempt: int,
    ) -> None:
        """Property: Delay never exceeds max_delay."""
        policy = RetryPolicy(
            RetryConfig(
                initial_delay=initial_delay,
                max_delay=max_delay,
                exponential_base=exponential_base,
            )
        )

        assert 0 < policy.delay(attempt) <= max_delay

    @given(
        initial_delay=initial_delay_strategy,
        exponential_base=exponential_base_strategy,
        attempt=st.integers(min_value=0, max_value=3),
    )
    @settings(max_examples=100)
    def test_uncapped_delay_is_exponential(
        self,
        initial_delay: float,
        exponential_base: float,
        attempt: int,
    ) -> None:
        """Property: Below the cap, delay is initial_delay * base ** attempt."""
        expected = initial_delay * exponential_base**attempt
        assume(expected <= 300.0)
        policy = RetryPolicy(
            RetryConfig(
                initial_delay=initial_delay,
                max_delay=300.0,
                exponential_base=exponential_base,
            )
        )

        assert math.isclose(policy.delay(attempt), expected)

    @given(attempt=attempt_strategy)
    @settings(max_examples=50)
    def test_delay_is_non_decreasing(self, attempt: int) -> None:
        """Property: Each delay is at least the previous one."""
        policy = RetryPolicy(RetryConfig())
        assert policy.delay(attempt + 1) >= policy.delay(attempt)

    def test_default_sequence(self) -> None:
        policy = RetryPolicy(RetryConfig())
        assert [policy.delay(n) for n in range(3)] == [1.0, 2.0, 4.0]

    def test_negative_attempt_rejected(self) -> None:
        with pytest.raises(ValueError):
            RetryPolicy(RetryConfig()).delay(-1)


class TestRetryability:
    """Property tests for which outcomes are retried."""

    @given(status=st.integers(min_value=500, max_value=599))
    @settings(max_examples=50)
    def test_5xx_retryable(self, status: int) -> None:
        """Property: Every 5xx response is retryable."""
        assert should_retry_status(status)
        assert RetryPolicy.is_retryable(HttpFailure(status, b""))

    @given(status=st.integers(min_value=100, max_value=499))
    @settings(max_examples=50)
    def test_below_500_not_retryable(self, status: int) -> None:
        """Property: No status below 500 is retryable, 401 included."""
        assert not should_retry_status(status)
        assert not RetryPolicy.is_retryable(HttpFailure(status, b""))

    def test_transport_failure_retryable(self) -> None:
        assert RetryPolicy.is_retryable(TransportFailure(TimeoutError()))

    def test_success_not_retryable(self) -> None:
        assert not RetryPolicy.is_retryable(Success(b"{}", 200))
