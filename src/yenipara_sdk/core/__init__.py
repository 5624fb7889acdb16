"""Core request pipeline components for the YeniPara SDK."""

from __future__ import annotations

from .auth_refresh import AuthRefreshCoordinator
from .codec import RequestCodec, is_live_market_path
from .errors import ErrorFactory
from .executor import RequestExecutor, RequestState
from .retry import RetryPolicy, should_retry_status

__all__ = [
    "AuthRefreshCoordinator",
    "ErrorFactory",
    "RequestCodec",
    "RequestExecutor",
    "RequestState",
    "RetryPolicy",
    "is_live_market_path",
    "should_retry_status",
]
