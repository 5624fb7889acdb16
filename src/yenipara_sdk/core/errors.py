"""Centralized error classification for the YeniPara SDK.

Turns attempt outcomes and unexpected exceptions into classified errors.
"""

from __future__ import annotations

import uuid

import httpx

from ..errors import (
    ClientError,
    InvalidResponseError,
    NetworkUnavailableError,
    ServerError,
    ServerErrorWithMessage,
    UnauthorizedError,
    YeniParaError,
)
from ..types import HttpFailure, TransportFailure
from .codec import RequestCodec

_NETWORK_CAUSES: tuple[type[BaseException], ...] = (
    TimeoutError,
    httpx.TimeoutException,
    httpx.NetworkError,
)


class ErrorFactory:
    """Classified error creation with consistent structure.

    All errors created through this factory carry the correlation id of
    the logical call they ended.
    """

    @staticmethod
    def generate_correlation_id() -> str:
        """Generate a unique correlation ID."""
        return str(uuid.uuid4())

    @staticmethod
    def from_http_failure(
        outcome: HttpFailure,
        *,
        correlation_id: str | None = None,
    ) -> YeniParaError:
        """Create classified error from a non-2xx response.

        Args:
            outcome: Failed HTTP outcome.
            correlation_id: Optional correlation ID for tracing.

        Returns:
            ``UnauthorizedError`` for 401, ``ServerErrorWithMessage`` for other
            4xx whose body parses as an error object (generic message when it
            carries none), ``ClientError`` for other 4xx, ``ServerError`` for
            5xx and ``InvalidResponseError`` otherwise.
        """
        status = outcome.status_code

        if status == 401:
            return UnauthorizedError(correlation_id=correlation_id)

        parsed = RequestCodec.parse_error_body(outcome.raw_body)

        if 400 <= status < 500:
            if parsed is not None:
                return ServerErrorWithMessage(
                    status, parsed.display_message, correlation_id=correlation_id
                )
            return ClientError(status, correlation_id=correlation_id)

        message = parsed.display_message if parsed and parsed.has_message else None

        if 500 <= status < 600:
            return ServerError(status, message, correlation_id=correlation_id)

        return InvalidResponseError(
            f"Unexpected response status: {status}",
            status_code=status,
            correlation_id=correlation_id,
        )

    @staticmethod
    def from_transport_failure(
        outcome: TransportFailure,
        *,
        correlation_id: str | None = None,
    ) -> YeniParaError:
        """Create classified error from a failed round trip.

        Timeouts and connection failures mean the network is unavailable;
        anything else is a malformed transport response.
        """
        cause = outcome.cause
        exc = cause if isinstance(cause, Exception) else None
        if isinstance(cause, _NETWORK_CAUSES):
            return NetworkUnavailableError(
                f"Network request failed: {type(cause).__name__}",
                correlation_id=correlation_id,
                cause=exc,
            )
        return InvalidResponseError(
            f"Invalid transport response: {cause}",
            correlation_id=correlation_id,
            cause=exc,
        )

    @staticmethod
    def from_exception(
        exc: Exception,
        *,
        correlation_id: str | None = None,
    ) -> YeniParaError:
        """Create classified error from an unexpected exception."""
        if isinstance(exc, YeniParaError):
            if exc.correlation_id is None:
                exc.correlation_id = correlation_id
            return exc

        if isinstance(exc, httpx.RequestError):
            return ErrorFactory.from_transport_failure(
                TransportFailure(exc), correlation_id=correlation_id
            )

        return InvalidResponseError(
            f"Unexpected error: {exc}",
            correlation_id=correlation_id,
            cause=exc,
        )
