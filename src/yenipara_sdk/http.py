"""HTTP transport for the YeniPara SDK.

Wraps ``httpx.AsyncClient`` so that one network round trip always produces
exactly one ``AttemptOutcome`` instead of raising.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx

from .telemetry import SDK_NAME, SDK_VERSION, get_logger, trace_operation
from .types import AttemptOutcome, HttpFailure, Success, TransportFailure

if TYPE_CHECKING:
    from .config import ClientConfig


def create_async_http_client(
    config: ClientConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create configured async HTTP client.

    Args:
        config: SDK configuration.
        transport: Optional transport override (used for testing).

    Returns:
        Configured httpx.AsyncClient.
    """
    return httpx.AsyncClient(
        base_url=config.base_url_str,
        timeout=httpx.Timeout(config.timeout, connect=config.connect_timeout),
        headers={
            "User-Agent": f"{SDK_NAME}/{SDK_VERSION} Python",
            "Accept": "application/json",
        },
        follow_redirects=False,
        transport=transport,
    )


class HTTPTransport:
    """Sends encoded requests and reports the outcome of each round trip."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        resource_timeout: float = 30.0,
    ) -> None:
        """Initialize transport.

        Args:
            client: Async HTTP client.
            resource_timeout: Upper bound for one whole round trip, in seconds.
        """
        self._client = client
        self._resource_timeout = resource_timeout
        self._logger = get_logger()

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def send(self, request: httpx.Request, *, attempt: int = 0) -> AttemptOutcome:
        """Perform one round trip.

        Timeouts, connection failures and protocol errors are reported as
        ``TransportFailure``. Cancellation propagates to the caller.
        """
        with trace_operation(
            "http_request",
            attributes={
                "http.method": request.method,
                "http.url": str(request.url.copy_with(query=None)),
                "attempt": attempt,
            },
        ) as span:
            try:
                async with asyncio.timeout(self._resource_timeout):
                    response = await self._client.send(request)
            except TimeoutError as e:
                self._logger.warning(
                    "Request exceeded resource timeout",
                    method=request.method,
                    path=request.url.path,
                    timeout=self._resource_timeout,
                )
                return TransportFailure(e)
            except httpx.RequestError as e:
                self._logger.warning(
                    "Transport failure",
                    method=request.method,
                    path=request.url.path,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                return TransportFailure(e)

            span.set_attribute("http.status_code", response.status_code)
            body = response.content

            if 200 <= response.status_code < 300:
                return Success(raw_body=body, status_code=response.status_code)
            return HttpFailure(status_code=response.status_code, raw_body=body)

    async def aclose(self) -> None:
        await self._client.aclose()
