"""Type definitions for the YeniPara SDK request pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Credentials:
    """Snapshot of the stored token pair."""

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None

    @property
    def has_access_token(self) -> bool:
        return bool(self.access_token)

    @property
    def has_refresh_token(self) -> bool:
        return bool(self.refresh_token)

    def __repr__(self) -> str:
        # Never render token values
        return (
            f"Credentials(access_token={'***' if self.access_token else None}, "
            f"refresh_token={'***' if self.refresh_token else None})"
        )


@dataclass(frozen=True)
class Success:
    """2xx response."""

    raw_body: bytes
    status_code: int


@dataclass(frozen=True)
class TransportFailure:
    """No HTTP response was obtained (timeout, connection or protocol error)."""

    cause: BaseException


@dataclass(frozen=True)
class HttpFailure:
    """Non-2xx HTTP response."""

    status_code: int
    raw_body: bytes

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


AttemptOutcome = Union[Success, TransportFailure, HttpFailure]
