"""Async YeniPara API client.

Wires configuration, token storage, reachability and the session event
channel into a ``RequestExecutor`` and exposes the API's endpoints as typed
coroutines.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Self, TypeVar

from .core.executor import RequestExecutor, Sleep
from .endpoints import (
    AuthEndpoints,
    MarketEndpoints,
    MoverType,
    ProfileEndpoints,
    QuizEndpoints,
    SocialEndpoints,
    VoteType,
)
from .errors import YeniParaError
from .events import SessionEvents
from .http import HTTPTransport, create_async_http_client
from .models import (
    APIResponse,
    AuthResponse,
    MessageResponse,
    QuizQuestionsData,
    QuizStatusData,
    QuizSubmitData,
    RegisterRequest,
    RequestSpec,
    User,
)
from .reachability import StaticReachability
from .telemetry import get_logger, trace_operation
from .token_store import InMemoryTokenStore

if TYPE_CHECKING:
    import httpx

    from .config import ClientConfig
    from .reachability import ReachabilityProbe
    from .token_store import TokenStore

T = TypeVar("T")


class YeniParaClient:
    """Asynchronous client for the YeniPara API."""

    def __init__(
        self,
        config: ClientConfig,
        *,
        token_store: TokenStore | None = None,
        reachability: ReachabilityProbe | None = None,
        events: SessionEvents | None = None,
        http_client: httpx.AsyncClient | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize client.

        Args:
            config: SDK configuration.
            token_store: Credential storage (in-memory if omitted).
            reachability: Network probe (always connected if omitted).
            events: Session event channel for logout notifications.
            http_client: Preconfigured httpx client (created from config if omitted).
            sleep: Awaitable used for backoff waits.
        """
        self.config = config
        self.token_store: TokenStore = token_store or InMemoryTokenStore()
        self.events = events or SessionEvents()
        self._http = http_client or create_async_http_client(config)
        self._transport = HTTPTransport(
            self._http, resource_timeout=config.resource_timeout
        )
        self._executor = RequestExecutor(
            config,
            self._transport,
            self.token_store,
            reachability=reachability or StaticReachability(True),
            events=self.events,
            sleep=sleep,
        )
        self._logger = get_logger()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._transport.aclose()

    @property
    def executor(self) -> RequestExecutor:
        return self._executor

    def prepare(self, spec: RequestSpec) -> RequestSpec:
        """Apply configured defaults to a spec that left them unset."""
        if "max_attempts" in spec.model_fields_set:
            return spec
        return spec.model_copy(update={"max_attempts": self.config.max_attempts})

    async def request(self, spec: RequestSpec, target_type: type[T] | Any = Any) -> T:
        """Execute any request spec and decode into ``target_type``."""
        return await self._executor.execute(self.prepare(spec), target_type)

    # Auth

    async def login(self, email: str, password: str) -> AuthResponse:
        """Sign in and store the returned token pair."""
        with trace_operation("login"):
            response: AuthResponse = await self.request(
                AuthEndpoints.login(email, password), AuthResponse
            )
            data = response.data
            if response.success and data and data.access_token:
                self.token_store.save_tokens(data.access_token, data.refresh_token)
                self._logger.info("Signed in", user_id=data.user_id)
            return response

    async def register(self, request: RegisterRequest) -> AuthResponse:
        return await self.request(AuthEndpoints.register(request), AuthResponse)

    async def verify_email(self, user_id: int, code: str) -> MessageResponse:
        return await self.request(AuthEndpoints.verify_email(user_id, code), MessageResponse)

    async def resend_otp(self, user_id: int) -> MessageResponse:
        return await self.request(AuthEndpoints.resend_otp(user_id), MessageResponse)

    async def forgot_password(self, email: str) -> MessageResponse:
        return await self.request(AuthEndpoints.forgot_password(email), MessageResponse)

    async def reset_password(self, email: str, code: str, new_password: str) -> MessageResponse:
        return await self.request(
            AuthEndpoints.reset_password(email, code, new_password), MessageResponse
        )

    async def logout(self) -> None:
        """Sign out on the server, then clear local credentials.

        Local state is cleared and observers notified even when the server
        call fails. Observers are notified once, also when the server call
        itself already forced a logout after a failed token refresh.
        """
        forced: list[bool] = []
        unsubscribe = self.events.subscribe(lambda: forced.append(True))
        try:
            if self.token_store.get_access_token():
                await self._executor.execute_raw(self.prepare(AuthEndpoints.logout()))
        except YeniParaError as e:
            self._logger.warning("Server logout failed", error=e.code)
        finally:
            unsubscribe()
            self.token_store.clear()
            if not forced:
                self.events.emit_logout()

    # Quiz

    async def get_quiz_questions(self) -> APIResponse[QuizQuestionsData]:
        return await self.request(QuizEndpoints.questions(), APIResponse[QuizQuestionsData])

    async def submit_quiz(self, answers: dict[str, int]) -> APIResponse[QuizSubmitData]:
        return await self.request(QuizEndpoints.submit(answers), APIResponse[QuizSubmitData])

    async def get_quiz_status(self) -> APIResponse[QuizStatusData]:
        return await self.request(QuizEndpoints.status(), APIResponse[QuizStatusData])

    async def get_quiz_result(self) -> APIResponse[QuizSubmitData]:
        return await self.request(QuizEndpoints.result(), APIResponse[QuizSubmitData])

    # Market

    async def get_symbols(
        self,
        page: int = 1,
        limit: int = 50,
        sort: str = "code",
        order: str = "asc",
    ) -> APIResponse[Any]:
        return await self.request(
            MarketEndpoints.symbols(page, limit, sort, order), APIResponse[Any]
        )

    async def search_symbols(self, query: str) -> APIResponse[Any]:
        return await self.request(MarketEndpoints.search_symbols(query), APIResponse[Any])

    async def get_fundamentals(self, symbol: str) -> APIResponse[Any]:
        return await self.request(MarketEndpoints.fundamentals(symbol), APIResponse[Any])

    async def get_candles(
        self,
        symbol: str,
        timeframe: str,
        start: str | None = None,
        end: str | None = None,
    ) -> APIResponse[Any]:
        return await self.request(
            MarketEndpoints.candles(symbol, timeframe, start, end), APIResponse[Any]
        )

    async def get_quotes(self, symbols: list[str]) -> APIResponse[Any]:
        return await self.request(MarketEndpoints.quotes(symbols), APIResponse[Any])

    async def get_snapshots(self, symbols: list[str]) -> APIResponse[Any]:
        return await self.request(MarketEndpoints.snapshots(symbols), APIResponse[Any])

    async def get_bars(
        self,
        symbol: str,
        timeframe: str = "1Day",
        limit: int | None = None,
    ) -> APIResponse[Any]:
        return await self.request(
            MarketEndpoints.bars(symbol, timeframe, limit), APIResponse[Any]
        )

    async def get_market_status(self) -> APIResponse[Any]:
        return await self.request(MarketEndpoints.market_status(), APIResponse[Any])

    async def get_top_movers(
        self, mover_type: MoverType = MoverType.GAINERS
    ) -> APIResponse[Any]:
        return await self.request(MarketEndpoints.top_movers(mover_type), APIResponse[Any])

    # Social

    async def get_stock_comments(
        self, symbol: str, page: int = 1, limit: int = 20
    ) -> APIResponse[Any]:
        return await self.request(
            SocialEndpoints.stock_comments(symbol, page, limit), APIResponse[Any]
        )

    async def add_stock_comment(
        self, symbol: str, content: str, sentiment: str | None = None
    ) -> APIResponse[Any]:
        return await self.request(
            SocialEndpoints.create_stock_comment(symbol, content, sentiment),
            APIResponse[Any],
        )

    async def vote_comment(self, comment_id: int, vote: VoteType) -> APIResponse[Any]:
        return await self.request(
            SocialEndpoints.vote_comment(comment_id, vote), APIResponse[Any]
        )

    async def follow_user(self, user_id: int) -> APIResponse[Any]:
        return await self.request(SocialEndpoints.follow_user(user_id), APIResponse[Any])

    async def unfollow_user(self, user_id: int) -> APIResponse[Any]:
        return await self.request(SocialEndpoints.unfollow_user(user_id), APIResponse[Any])

    async def get_forum_categories(self) -> APIResponse[Any]:
        return await self.request(SocialEndpoints.forum_categories(), APIResponse[Any])

    async def get_threads(
        self, topic_id: int, page: int = 1, limit: int = 20
    ) -> APIResponse[Any]:
        return await self.request(
            SocialEndpoints.threads(topic_id, page, limit), APIResponse[Any]
        )

    async def get_thread(self, thread_id: int) -> APIResponse[Any]:
        return await self.request(SocialEndpoints.thread(thread_id), APIResponse[Any])

    async def create_thread(self, topic_id: int, title: str, content: str) -> APIResponse[Any]:
        return await self.request(
            SocialEndpoints.create_thread(topic_id, title, content), APIResponse[Any]
        )

    async def reply_to_thread(self, thread_id: int, content: str) -> APIResponse[Any]:
        return await self.request(
            SocialEndpoints.reply(thread_id, content), APIResponse[Any]
        )

    async def vote_thread(self, thread_id: int, vote: VoteType) -> APIResponse[Any]:
        return await self.request(
            SocialEndpoints.vote_thread(thread_id, vote), APIResponse[Any]
        )

    # Profile

    async def get_user(self, user_id: int) -> APIResponse[User]:
        return await self.request(ProfileEndpoints.user(user_id), APIResponse[User])

    async def update_profile(self, profile: dict[str, Any]) -> APIResponse[User]:
        return await self.request(ProfileEndpoints.update_profile(profile), APIResponse[User])

    async def get_settings(self) -> APIResponse[Any]:
        return await self.request(ProfileEndpoints.settings(), APIResponse[Any])

    async def update_settings(self, settings: dict[str, Any]) -> APIResponse[Any]:
        return await self.request(ProfileEndpoints.update_settings(settings), APIResponse[Any])

    async def get_profile_photo(self, filename: str) -> bytes:
        """Fetch a profile photo as raw image bytes."""
        return await self._executor.execute_raw(self.prepare(ProfileEndpoints.photo(filename)))

    async def delete_account(self) -> MessageResponse:
        return await self.request(ProfileEndpoints.delete_account(), MessageResponse)
