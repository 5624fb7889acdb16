"""Error classes for the YeniPara SDK.

Every failure a request can end in is one of the classified errors below.
Callers catch ``YeniParaError`` (or a specific subclass); raw ``httpx`` or
pydantic exceptions never escape the request pipeline.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the YeniPara SDK."""

    # Request construction (1xxx)
    INVALID_URL = "REQ_1001"

    # Authentication (2xxx)
    UNAUTHORIZED = "AUTH_2001"
    TOKEN_REFRESH_FAILED = "AUTH_2002"

    # Client errors (4xxx)
    CLIENT_ERROR = "CLI_4001"
    SERVER_MESSAGE = "CLI_4002"

    # Server errors (5xxx)
    SERVER_ERROR = "SRV_5001"

    # Response handling (6xxx)
    INVALID_RESPONSE = "RSP_6001"
    DECODING_ERROR = "RSP_6002"

    # Network (7xxx)
    NETWORK_UNAVAILABLE = "NET_7001"


class YeniParaError(Exception):
    """Base error for the YeniPara SDK with structured error information."""

    retryable: bool = False

    def __init__(
        self,
        message: str,
        code: ErrorCode | str,
        *,
        status_code: int | None = None,
        correlation_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code.value if isinstance(code, ErrorCode) else code
        self.status_code = status_code
        self.correlation_id = correlation_id
        self.details = details or {}

    @property
    def is_retryable(self) -> bool:
        """Whether the failure that produced this error may be retried."""
        return self.retryable

    @property
    def display_message(self) -> str:
        """Message suitable for showing to an end user."""
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error": self.message,
            "code": self.code,
            "status_code": self.status_code,
            "correlation_id": self.correlation_id,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidURLError(YeniParaError):
    """Request URL could not be built from base URL and path."""

    def __init__(
        self,
        message: str = "Invalid URL",
        *,
        url: str | None = None,
        correlation_id: str | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.INVALID_URL,
            correlation_id=correlation_id,
            details={"url": url} if url else None,
        )


class InvalidResponseError(YeniParaError):
    """Response was not a usable HTTP response."""

    def __init__(
        self,
        message: str = "Invalid server response",
        *,
        status_code: int | None = None,
        correlation_id: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.INVALID_RESPONSE,
            status_code=status_code,
            correlation_id=correlation_id,
            details={"cause": str(cause)} if cause else None,
        )
        self.__cause__ = cause


class UnauthorizedError(YeniParaError):
    """No valid credentials, or credentials rejected after a refresh attempt."""

    def __init__(
        self,
        message: str = "Your session has expired. Please sign in again.",
        *,
        correlation_id: str | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.UNAUTHORIZED,
            status_code=401,
            correlation_id=correlation_id,
        )


class ClientError(YeniParaError):
    """4xx response without a parseable error body."""

    def __init__(
        self,
        status_code: int,
        message: str | None = None,
        *,
        correlation_id: str | None = None,
    ) -> None:
        super().__init__(
            message or f"Request failed: {status_code}",
            ErrorCode.CLIENT_ERROR,
            status_code=status_code,
            correlation_id=correlation_id,
        )


class ServerError(YeniParaError):
    """5xx response without a parseable error body."""

    retryable = True

    def __init__(
        self,
        status_code: int = 500,
        message: str | None = None,
        *,
        correlation_id: str | None = None,
    ) -> None:
        super().__init__(
            message or f"Server error: {status_code}",
            ErrorCode.SERVER_ERROR,
            status_code=status_code,
            correlation_id=correlation_id,
        )


class ServerErrorWithMessage(YeniParaError):
    """Error response whose body carried a message."""

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        correlation_id: str | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.SERVER_MESSAGE,
            status_code=status_code,
            correlation_id=correlation_id,
        )

    @property
    def is_retryable(self) -> bool:
        return self.status_code is not None and self.status_code >= 500


class DecodingError(YeniParaError):
    """Response body did not match the expected shape."""

    def __init__(
        self,
        message: str = "Could not process response data",
        *,
        target: str | None = None,
        correlation_id: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if target:
            details["target"] = target
        if cause:
            details["cause"] = str(cause)
        super().__init__(
            message,
            ErrorCode.DECODING_ERROR,
            correlation_id=correlation_id,
            details=details,
        )
        self.__cause__ = cause


class NetworkUnavailableError(YeniParaError):
    """Network is unreachable, or every attempt failed at the transport level."""

    retryable = True

    def __init__(
        self,
        message: str = "Check your internet connection",
        *,
        correlation_id: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.NETWORK_UNAVAILABLE,
            correlation_id=correlation_id,
            details={"cause": str(cause)} if cause else None,
        )
        self.__cause__ = cause


class TokenRefreshError(YeniParaError):
    """Refresh token exchange failed.

    Raised by the refresh coordinator and converted into
    ``UnauthorizedError`` by the executor.
    """

    def __init__(
        self,
        message: str = "Failed to refresh token",
        *,
        status_code: int | None = None,
        correlation_id: str | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.TOKEN_REFRESH_FAILED,
            status_code=status_code,
            correlation_id=correlation_id,
        )


CLASSIFIED_ERRORS: tuple[type[YeniParaError], ...] = (
    InvalidURLError,
    InvalidResponseError,
    UnauthorizedError,
    ClientError,
    ServerError,
    ServerErrorWithMessage,
    DecodingError,
    NetworkUnavailableError,
)
