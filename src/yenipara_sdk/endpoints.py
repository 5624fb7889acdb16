"""Request spec factories for the YeniPara REST API.

Each factory returns the ``RequestSpec`` of one API call; payload shapes
follow the server's snake_case wire format.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Any
from urllib.parse import quote

from .models import HTTPMethod, RegisterRequest, RequestSpec

API_PREFIX = "/api/v1"


def _segment(value: str | int) -> str:
    """Escape a value used as a single path segment."""
    return quote(str(value), safe="")


def _spec(
    path: str,
    method: HTTPMethod = HTTPMethod.GET,
    *,
    body: Any = None,
    params: dict[str, Any] | None = None,
    requires_auth: bool = True,
    max_attempts: int | None = None,
) -> RequestSpec:
    # Unset max_attempts lets the client apply its configured default
    extra: dict[str, Any] = {}
    if max_attempts is not None:
        extra["max_attempts"] = max_attempts
    return RequestSpec(
        path=f"{API_PREFIX}{path}",
        method=method,
        body=body,
        params=params or None,
        requires_auth=requires_auth,
        **extra,
    )


class MoverType(StrEnum):
    GAINERS = "gainers"
    LOSERS = "losers"
    VOLUME = "volume"


class VoteType(IntEnum):
    LIKE = 1
    DISLIKE = -1


class AuthEndpoints:
    """Authentication and account recovery."""

    @staticmethod
    def login(email: str, password: str) -> RequestSpec:
        return _spec(
            "/auth/login",
            HTTPMethod.POST,
            body={"email": email, "password": password},
            requires_auth=False,
        )

    @staticmethod
    def register(request: RegisterRequest) -> RequestSpec:
        return _spec(
            "/auth/register",
            HTTPMethod.POST,
            body=request.model_dump(),
            requires_auth=False,
        )

    @staticmethod
    def verify_email(user_id: int, code: str) -> RequestSpec:
        return _spec(
            "/auth/verify-email",
            HTTPMethod.POST,
            body={"user_id": user_id, "code": code},
            requires_auth=False,
        )

    @staticmethod
    def resend_otp(user_id: int) -> RequestSpec:
        return _spec(
            "/auth/resend-otp",
            HTTPMethod.POST,
            body={"user_id": user_id},
            requires_auth=False,
        )

    @staticmethod
    def refresh(refresh_token: str) -> RequestSpec:
        return _spec(
            "/auth/refresh",
            HTTPMethod.POST,
            body={"refresh_token": refresh_token},
            requires_auth=False,
            max_attempts=1,
        )

    @staticmethod
    def forgot_password(email: str) -> RequestSpec:
        return _spec(
            "/auth/forgot-password",
            HTTPMethod.POST,
            body={"email": email},
            requires_auth=False,
        )

    @staticmethod
    def reset_password(email: str, code: str, new_password: str) -> RequestSpec:
        return _spec(
            "/auth/reset-password",
            HTTPMethod.POST,
            body={"email": email, "code": code, "new_password": new_password},
            requires_auth=False,
        )

    @staticmethod
    def logout() -> RequestSpec:
        return _spec("/auth/logout", HTTPMethod.DELETE)


class QuizEndpoints:
    """Investor profile questionnaire."""

    @staticmethod
    def questions() -> RequestSpec:
        return _spec("/quiz/questions", requires_auth=False)

    @staticmethod
    def submit(answers: dict[str, int]) -> RequestSpec:
        return _spec("/quiz/submit", HTTPMethod.POST, body={"answers": dict(answers)})

    @staticmethod
    def status() -> RequestSpec:
        return _spec("/quiz/status")

    @staticmethod
    def result() -> RequestSpec:
        return _spec("/quiz/result")


class MarketEndpoints:
    """Symbols and market data."""

    @staticmethod
    def symbols(
        page: int = 1,
        limit: int = 50,
        sort: str = "code",
        order: str = "asc",
    ) -> RequestSpec:
        return _spec(
            "/symbols",
            params={"page": page, "limit": limit, "sort": sort, "order": order},
        )

    @staticmethod
    def search_symbols(query: str) -> RequestSpec:
        return _spec("/symbols/search", params={"q": query})

    @staticmethod
    def fundamentals(symbol: str) -> RequestSpec:
        return _spec(f"/fundamental/{_segment(symbol)}")

    @staticmethod
    def candles(
        symbol: str,
        timeframe: str,
        start: str | None = None,
        end: str | None = None,
    ) -> RequestSpec:
        return _spec(
            "/market/candles",
            params={"symbol": symbol, "timeframe": timeframe, "from": start, "to": end},
        )

    @staticmethod
    def quotes(symbols: list[str]) -> RequestSpec:
        return _spec("/market/quotes", params={"symbols": ",".join(symbols)})

    @staticmethod
    def snapshots(symbols: list[str]) -> RequestSpec:
        return _spec("/market/snapshots", params={"symbols": ",".join(symbols)})

    @staticmethod
    def bars(symbol: str, timeframe: str = "1Day", limit: int | None = None) -> RequestSpec:
        return _spec(
            "/market/bars",
            params={"symbol": symbol, "timeframe": timeframe, "limit": limit},
        )

    @staticmethod
    def market_status() -> RequestSpec:
        return _spec("/market/status")

    @staticmethod
    def top_movers(mover_type: MoverType = MoverType.GAINERS) -> RequestSpec:
        return _spec("/market/top-movers", params={"type": MoverType(mover_type).value})


class SocialEndpoints:
    """Stock comments, votes, follows and forum threads."""

    @staticmethod
    def stock_comments(symbol: str, page: int = 1, limit: int = 20) -> RequestSpec:
        return _spec(
            f"/stocks/{_segment(symbol)}/comments",
            params={"page": page, "limit": limit},
        )

    @staticmethod
    def create_stock_comment(
        symbol: str,
        content: str,
        sentiment: str | None = None,
    ) -> RequestSpec:
        body: dict[str, Any] = {"content": content}
        if sentiment is not None:
            body["sentiment"] = sentiment
        return _spec(f"/stocks/{_segment(symbol)}/comments", HTTPMethod.POST, body=body)

    @staticmethod
    def vote_comment(comment_id: int, vote: VoteType) -> RequestSpec:
        return _spec(
            f"/comments/{_segment(comment_id)}/vote",
            HTTPMethod.POST,
            body={"vote_type": int(vote)},
        )

    @staticmethod
    def follow_user(user_id: int) -> RequestSpec:
        return _spec(f"/users/{_segment(user_id)}/follow", HTTPMethod.POST)

    @staticmethod
    def unfollow_user(user_id: int) -> RequestSpec:
        return _spec(f"/users/{_segment(user_id)}/follow", HTTPMethod.DELETE)

    @staticmethod
    def forum_categories() -> RequestSpec:
        return _spec("/forum/categories")

    @staticmethod
    def threads(topic_id: int, page: int = 1, limit: int = 20) -> RequestSpec:
        return _spec(
            f"/forum/topics/{_segment(topic_id)}/threads",
            params={"page": page, "limit": limit},
        )

    @staticmethod
    def thread(thread_id: int) -> RequestSpec:
        return _spec(f"/forum/threads/{_segment(thread_id)}")

    @staticmethod
    def create_thread(topic_id: int, title: str, content: str) -> RequestSpec:
        return _spec(
            "/forum/threads",
            HTTPMethod.POST,
            body={"topic_id": topic_id, "title": title, "content": content},
        )

    @staticmethod
    def reply(thread_id: int, content: str) -> RequestSpec:
        return _spec(
            f"/forum/threads/{_segment(thread_id)}/reply",
            HTTPMethod.POST,
            body={"content": content},
        )

    @staticmethod
    def vote_thread(thread_id: int, vote: VoteType) -> RequestSpec:
        return _spec(
            f"/forum/threads/{_segment(thread_id)}/vote",
            HTTPMethod.POST,
            body={"vote_type": int(vote)},
        )


class ProfileEndpoints:
    """User profiles and settings."""

    @staticmethod
    def user(user_id: int) -> RequestSpec:
        return _spec(f"/users/{_segment(user_id)}")

    @staticmethod
    def update_profile(profile: dict[str, Any]) -> RequestSpec:
        return _spec("/users/profile", HTTPMethod.PUT, body=dict(profile))

    @staticmethod
    def settings() -> RequestSpec:
        return _spec("/users/settings")

    @staticmethod
    def update_settings(settings: dict[str, Any]) -> RequestSpec:
        return _spec("/users/settings", HTTPMethod.PUT, body=dict(settings))

    @staticmethod
    def photo(filename: str) -> RequestSpec:
        return _spec(f"/user/photo/{_segment(filename)}")

    @staticmethod
    def delete_account() -> RequestSpec:
        return _spec("/users/account", HTTPMethod.DELETE)
