"""Retry policy: backoff delays between retryable attempts."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..types import AttemptOutcome, HttpFailure, TransportFailure

if TYPE_CHECKING:
    from ..config import RetryConfig


def should_retry_status(status_code: int) -> bool:
    """Check if status code should trigger retry.

    Args:
        status_code: HTTP status code.

    Returns:
        True for 5xx responses only. 4xx, 401 included, is never retried here.
    """
    return status_code >= 500


class RetryPolicy:
    """Exponential backoff: ``initial_delay * base ** attempt``, capped at ``max_delay``."""

    def __init__(self, config: RetryConfig) -> None:
        self._config = config

    @property
    def config(self) -> RetryConfig:
        return self._config

    def delay(self, attempt: int) -> float:
        """Delay in seconds after the zero-indexed ``attempt`` failed."""
        if attempt < 0:
            msg = f"attempt must be >= 0, got {attempt}"
            raise ValueError(msg)
        return self._config.get_delay(attempt)

    @staticmethod
    def is_retryable(outcome: AttemptOutcome) -> bool:
        """Whether an attempt outcome may be retried."""
        if isinstance(outcome, TransportFailure):
            return True
        if isinstance(outcome, HttpFailure):
            return outcome.is_server_error
        return False
