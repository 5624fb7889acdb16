"""Request executor for the YeniPara SDK.

Runs one ``RequestSpec`` to completion: pre-flight checks, retries with
exponential backoff, a single refresh-and-replay on 401, and decoding.
"""

from __future__ import annotations

import asyncio
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, TypeVar

import httpx

from ..errors import (
    DecodingError,
    NetworkUnavailableError,
    TokenRefreshError,
    UnauthorizedError,
    YeniParaError,
)
from ..events import SessionEvents
from ..reachability import StaticReachability
from ..telemetry import get_logger, trace_operation
from ..token_store import read_credentials
from ..types import HttpFailure, Success, TransportFailure
from .auth_refresh import AuthRefreshCoordinator
from .codec import RequestCodec
from .errors import ErrorFactory
from .retry import RetryPolicy

if TYPE_CHECKING:
    import structlog

    from ..config import ClientConfig
    from ..http import HTTPTransport
    from ..models import RequestSpec
    from ..reachability import ReachabilityProbe
    from ..token_store import TokenStore
    from ..types import AttemptOutcome

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[Any]]


class RequestState(StrEnum):
    """Lifecycle states of one logical call."""

    IDLE = "idle"
    SENDING = "sending"
    RETRY_WAIT = "retry_wait"
    AWAITING_REFRESH = "awaiting_refresh"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class RequestExecutor:
    """Executes request specs against the YeniPara API."""

    def __init__(
        self,
        config: ClientConfig,
        transport: HTTPTransport,
        token_store: TokenStore,
        *,
        reachability: ReachabilityProbe | None = None,
        events: SessionEvents | None = None,
        codec: RequestCodec | None = None,
        retry_policy: RetryPolicy | None = None,
        refresh_coordinator: AuthRefreshCoordinator | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize executor.

        Args:
            config: SDK configuration.
            transport: Transport performing single round trips.
            token_store: Credential storage.
            reachability: Network probe checked before every request.
            events: Session event channel; receives logout on auth failure.
            codec: Request codec (built from config if omitted).
            retry_policy: Backoff policy (built from config if omitted).
            refresh_coordinator: Refresh coordinator (built if omitted).
            sleep: Awaitable used for backoff waits.
        """
        self._config = config
        self._transport = transport
        self._token_store = token_store
        self._reachability = reachability or StaticReachability(True)
        self._events = events or SessionEvents()
        self._codec = codec or RequestCodec(config)
        self._retry_policy = retry_policy or RetryPolicy(config.retry)
        self._refresh = refresh_coordinator or AuthRefreshCoordinator(
            self._codec,
            transport,
            token_store,
            refresh_path=config.refresh_path,
        )
        self._sleep = sleep
        self._logger = get_logger()

    @property
    def codec(self) -> RequestCodec:
        return self._codec

    @property
    def events(self) -> SessionEvents:
        return self._events

    @property
    def refresh_coordinator(self) -> AuthRefreshCoordinator:
        return self._refresh

    async def execute(self, spec: RequestSpec, target_type: type[T] | Any) -> T:
        """Execute ``spec`` and decode the response into ``target_type``.

        Args:
            spec: Request description.
            target_type: Type to decode the 2xx body into.

        Returns:
            The decoded value.

        Raises:
            YeniParaError: A classified error; see ``errors.CLASSIFIED_ERRORS``.
        """
        correlation_id = ErrorFactory.generate_correlation_id()
        log = self._logger.bind(
            correlation_id=correlation_id,
            method=spec.method.value,
            path=spec.path,
        )

        with trace_operation(
            "api_request",
            attributes={
                "http.method": spec.method.value,
                "http.path": spec.path,
                "correlation_id": correlation_id,
            },
        ):
            try:
                success = await self._perform(spec, correlation_id, log)
            except YeniParaError:
                raise
            except Exception as e:
                error = ErrorFactory.from_exception(e, correlation_id=correlation_id)
                self._transition(
                    log, RequestState.FAILED, error=error.code, error_type=type(e).__name__
                )
                raise error from e

            try:
                value = self._codec.decode_success(success.raw_body, target_type)
            except DecodingError as e:
                e.correlation_id = correlation_id
                self._transition(log, RequestState.FAILED, error=e.code)
                raise

            self._transition(log, RequestState.SUCCEEDED, status_code=success.status_code)
            return value

    async def execute_raw(self, spec: RequestSpec) -> bytes:
        """Execute ``spec`` and return the undecoded 2xx body."""
        return await self.execute(spec, bytes)

    async def _perform(
        self,
        spec: RequestSpec,
        correlation_id: str,
        log: structlog.BoundLogger,
    ) -> Success:
        self._transition(log, RequestState.IDLE)

        try:
            if not self._reachability.is_connected():
                raise NetworkUnavailableError(
                    "No network connection", correlation_id=correlation_id
                )
            url = self._codec.build_url(spec.path, spec.params)
        except YeniParaError as e:
            e.correlation_id = correlation_id
            self._transition(log, RequestState.FAILED, error=e.code)
            raise

        last_error: YeniParaError | None = None

        for attempt in range(spec.max_attempts):
            token = self._access_token_for(spec, correlation_id, log)
            request = self._codec.encode(spec, token, url=url)

            self._transition(log, RequestState.SENDING, attempt=attempt)
            outcome = await self._transport.send(request, attempt=attempt)

            if isinstance(outcome, Success):
                return outcome

            if isinstance(outcome, HttpFailure) and outcome.is_unauthorized and spec.requires_auth:
                return await self._refresh_and_replay(
                    spec, url, token, attempt, correlation_id, log
                )

            error = self._classify(outcome, correlation_id)

            if not self._retry_policy.is_retryable(outcome):
                self._transition(log, RequestState.FAILED, error=error.code, attempt=attempt)
                raise error

            last_error = error
            if attempt + 1 >= spec.max_attempts:
                break

            delay = self._retry_policy.delay(attempt)
            self._transition(
                log,
                RequestState.RETRY_WAIT,
                attempt=attempt,
                delay=delay,
                error=error.code,
            )
            await self._sleep(delay)

        assert last_error is not None
        self._transition(
            log,
            RequestState.FAILED,
            error=last_error.code,
            attempts=spec.max_attempts,
        )
        raise last_error

    async def _refresh_and_replay(
        self,
        spec: RequestSpec,
        url: httpx.URL,
        stale_token: str | None,
        attempt: int,
        correlation_id: str,
        log: structlog.BoundLogger,
    ) -> Success:
        self._transition(log, RequestState.AWAITING_REFRESH, attempt=attempt)

        try:
            credentials = await self._refresh.refresh(stale_access_token=stale_token)
        except TokenRefreshError as e:
            log.warning("Token refresh failed, forcing logout", reason=e.message)
            self._force_logout()
            self._transition(log, RequestState.FAILED, error="unauthorized")
            raise UnauthorizedError(correlation_id=correlation_id) from e

        # Single replay, not counted against max_attempts
        request = self._codec.encode(spec, credentials.access_token, url=url)
        self._transition(log, RequestState.SENDING, attempt=attempt, replay=True)
        outcome = await self._transport.send(request, attempt=attempt + 1)

        if isinstance(outcome, Success):
            return outcome

        error = self._classify(outcome, correlation_id)
        self._transition(log, RequestState.FAILED, error=error.code, replay=True)
        raise error

    def _access_token_for(
        self,
        spec: RequestSpec,
        correlation_id: str,
        log: structlog.BoundLogger,
    ) -> str | None:
        if not spec.requires_auth:
            return None
        token = read_credentials(self._token_store).access_token
        if not token:
            self._transition(log, RequestState.FAILED, error="missing_access_token")
            raise UnauthorizedError(correlation_id=correlation_id)
        return token

    def _force_logout(self) -> None:
        self._token_store.clear()
        self._events.emit_logout()

    @staticmethod
    def _classify(outcome: AttemptOutcome, correlation_id: str) -> YeniParaError:
        if isinstance(outcome, TransportFailure):
            return ErrorFactory.from_transport_failure(outcome, correlation_id=correlation_id)
        if isinstance(outcome, HttpFailure):
            return ErrorFactory.from_http_failure(outcome, correlation_id=correlation_id)
        msg = f"Cannot classify successful outcome: {outcome!r}"
        raise TypeError(msg)

    @staticmethod
    def _transition(
        log: structlog.BoundLogger,
        state: RequestState,
        **fields: Any,
    ) -> None:
        if state is RequestState.FAILED:
            log.warning("Request failed", state=state.value, **fields)
        elif state is RequestState.RETRY_WAIT:
            log.warning("Request failed, retrying", state=state.value, **fields)
        else:
            log.debug("Request state", state=state.value, **fields)
