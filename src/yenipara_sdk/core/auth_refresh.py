"""Access-token refresh for the YeniPara SDK.

Exchanges the stored refresh token for a new access token. Concurrent
callers share a single in-flight exchange.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from ..endpoints import AuthEndpoints
from ..errors import DecodingError, TokenRefreshError
from ..models import AuthResponse
from ..telemetry import get_logger, trace_operation
from ..token_store import read_credentials
from ..types import Credentials, HttpFailure, Success

if TYPE_CHECKING:
    from ..http import HTTPTransport
    from ..token_store import TokenStore
    from .codec import RequestCodec


class AuthRefreshCoordinator:
    """Runs the refresh-token exchange and persists its result.

    The exchange itself is attempted once; there are no retries of the
    refresh call. While an exchange is in flight, further callers await the
    same result instead of starting their own.
    """

    def __init__(
        self,
        codec: RequestCodec,
        transport: HTTPTransport,
        token_store: TokenStore,
        *,
        refresh_path: str = "/api/v1/auth/refresh",
    ) -> None:
        self._codec = codec
        self._transport = transport
        self._token_store = token_store
        self._refresh_path = refresh_path
        self._inflight: asyncio.Task[Credentials] | None = None
        self._exchange_count = 0
        self._logger = get_logger()

    @property
    def exchange_count(self) -> int:
        """Number of refresh exchanges sent to the server."""
        return self._exchange_count

    async def refresh(self, stale_access_token: str | None = None) -> Credentials:
        """Obtain fresh credentials.

        Args:
            stale_access_token: The access token that was just rejected. If the
                store already holds a different one, another caller refreshed
                in the meantime and the stored credentials are returned as is.

        Returns:
            The credentials now in the token store.

        Raises:
            TokenRefreshError: If no refresh token is stored or the exchange
                failed.
        """
        current = read_credentials(self._token_store)

        if (
            stale_access_token is not None
            and current.access_token
            and current.access_token != stale_access_token
        ):
            self._logger.debug("Credentials already refreshed by another request")
            return current

        if self._inflight is None:
            if not current.has_refresh_token:
                raise TokenRefreshError("No refresh token available")
            task = asyncio.create_task(self._exchange(current))
            task.add_done_callback(self._on_exchange_done)
            self._inflight = task
        else:
            self._logger.debug("Joining in-flight token refresh")

        # Shielded so a cancelled caller does not abort the shared exchange
        return await asyncio.shield(self._inflight)

    def _on_exchange_done(self, task: asyncio.Task[Credentials]) -> None:
        if self._inflight is task:
            self._inflight = None
        if not task.cancelled():
            # Mark the exception retrieved even when every waiter was cancelled
            task.exception()

    async def _exchange(self, credentials: Credentials) -> Credentials:
        spec = AuthEndpoints.refresh(credentials.refresh_token or "").model_copy(
            update={"path": self._refresh_path}
        )

        with trace_operation("token_refresh", attributes={"http.path": spec.path}):
            request = self._codec.encode(spec)
            self._exchange_count += 1
            outcome = await self._transport.send(request)

            if not isinstance(outcome, Success):
                status = outcome.status_code if isinstance(outcome, HttpFailure) else None
                self._logger.warning("Token refresh rejected", status_code=status)
                raise TokenRefreshError(
                    f"Token refresh failed: {status or 'transport error'}",
                    status_code=status,
                )

            try:
                response = self._codec.decode_success(outcome.raw_body, AuthResponse)
            except DecodingError as e:
                raise TokenRefreshError("Malformed token refresh response") from e

            data = response.data
            if not response.success or data is None or not data.access_token:
                raise TokenRefreshError(response.error or "Token refresh unsuccessful")

            refresh_token = data.refresh_token or credentials.refresh_token
            self._token_store.save_tokens(data.access_token, refresh_token)
            self._logger.info(
                "Access token refreshed",
                refresh_token_rotated=data.refresh_token is not None,
                exchange=self.exchange_count,
            )
            return Credentials(access_token=data.access_token, refresh_token=refresh_token)
