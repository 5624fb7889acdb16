"""YeniPara Python SDK."""

from .client import YeniParaClient
from .config import ClientConfig, RetryConfig, TelemetryConfig
from .core import RequestCodec, RequestExecutor, RetryPolicy
from .errors import (
    ClientError,
    DecodingError,
    ErrorCode,
    InvalidResponseError,
    InvalidURLError,
    NetworkUnavailableError,
    ServerError,
    ServerErrorWithMessage,
    UnauthorizedError,
    YeniParaError,
)
from .events import SessionEvents
from .models import APIResponse, HTTPMethod, RequestSpec
from .reachability import ReachabilityProbe, StaticReachability
from .token_store import InMemoryTokenStore, TokenStore
from .types import Credentials

__all__ = [
    "YeniParaClient",
    "ClientConfig",
    "RetryConfig",
    "TelemetryConfig",
    "RequestCodec",
    "RequestExecutor",
    "RetryPolicy",
    "YeniParaError",
    "ErrorCode",
    "InvalidURLError",
    "InvalidResponseError",
    "UnauthorizedError",
    "ClientError",
    "ServerError",
    "ServerErrorWithMessage",
    "DecodingError",
    "NetworkUnavailableError",
    "SessionEvents",
    "APIResponse",
    "HTTPMethod",
    "RequestSpec",
    "ReachabilityProbe",
    "StaticReachability",
    "InMemoryTokenStore",
    "TokenStore",
    "Credentials",
]

__version__ = "0.1.0"
