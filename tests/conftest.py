"""
Shared test fixtures for YeniPara SDK tests.

Provides configuration, a scripted HTTP transport and helpers to build
executors and clients without touching the network.
"""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest
from hypothesis import settings

from yenipara_sdk.client import YeniParaClient
from yenipara_sdk.config import ClientConfig, RetryConfig, TelemetryConfig
from yenipara_sdk.core.executor import RequestExecutor
from yenipara_sdk.events import SessionEvents
from yenipara_sdk.http import HTTPTransport, create_async_http_client
from yenipara_sdk.reachability import StaticReachability
from yenipara_sdk.telemetry import configure_telemetry
from yenipara_sdk.token_store import InMemoryTokenStore

settings.register_profile("ci", max_examples=100)
settings.register_profile("dev", max_examples=50)
settings.load_profile("dev")

BASE_URL = "https://api.yenipara.test"


@pytest.fixture(autouse=True, scope="session")
def quiet_telemetry() -> None:
    """Disable log output and tracing for the test session."""
    configure_telemetry(TelemetryConfig(enabled=False))


class ScriptedTransport:
    """Replays scripted responses per path and records every request.

    The last scripted item for a path repeats once the others are used up.
    Exception instances are re-raised as fresh exceptions of the same type.
    """

    def __init__(self) -> None:
        self.routes: dict[str, list[Any]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, *responses: httpx.Response | Exception) -> None:
        self.routes.setdefault(path, []).extend(responses)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get(request.url.path)
        if not queue:
            return httpx.Response(404, json={"error": f"no route for {request.url.path}"})
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise type(item)(str(item), request=request)
        return httpx.Response(item.status_code, headers=item.headers, content=item.content)

    def calls(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def mock(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class RecordingSleep:
    """Stand-in for ``asyncio.sleep`` that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def config() -> ClientConfig:
    """Provide a basic SDK configuration for testing."""
    return ClientConfig(
        base_url=BASE_URL,
        platform="test",
        app_version="9.9.9",
        retry=RetryConfig(initial_delay=1.0, exponential_base=2.0, jitter=0.0),
    )


@pytest.fixture
def scripted() -> ScriptedTransport:
    return ScriptedTransport()


@pytest.fixture
def sleeper() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def token_store() -> InMemoryTokenStore:
    return InMemoryTokenStore(access_token="abc", refresh_token="refresh-1")


@pytest.fixture
def events() -> SessionEvents:
    return SessionEvents()


@pytest.fixture
def reachability() -> StaticReachability:
    return StaticReachability(True)


@pytest.fixture
def make_executor(
    config: ClientConfig,
    scripted: ScriptedTransport,
    sleeper: RecordingSleep,
    token_store: InMemoryTokenStore,
    events: SessionEvents,
    reachability: StaticReachability,
) -> Callable[..., RequestExecutor]:
    """Factory building an executor over the scripted transport."""

    def factory(store: InMemoryTokenStore | None = None) -> RequestExecutor:
        client = create_async_http_client(config, transport=scripted.mock())
        transport = HTTPTransport(client, resource_timeout=config.resource_timeout)
        return RequestExecutor(
            config,
            transport,
            store if store is not None else token_store,
            reachability=reachability,
            events=events,
            sleep=sleeper,
        )

    return factory


@pytest.fixture
def make_client(
    config: ClientConfig,
    scripted: ScriptedTransport,
    sleeper: RecordingSleep,
    token_store: InMemoryTokenStore,
    events: SessionEvents,
    reachability: StaticReachability,
) -> Callable[[], YeniParaClient]:
    """Factory building a client over the scripted transport."""

    def factory() -> YeniParaClient:
        return YeniParaClient(
            config,
            token_store=token_store,
            reachability=reachability,
            events=events,
            http_client=create_async_http_client(config, transport=scripted.mock()),
            sleep=sleeper,
        )

    return factory
