"""Token persistence contract and an in-memory implementation."""

from __future__ import annotations

import threading
from typing import Protocol, runtime_checkable

from .types import Credentials


@runtime_checkable
class TokenStore(Protocol):
    """Secure key-value store holding the access/refresh token pair.

    ``save_tokens`` must be atomic relative to the getters: a reader sees
    either the old pair or the new pair, never a mix.
    """

    def get_access_token(self) -> str | None: ...

    def get_refresh_token(self) -> str | None: ...

    def save_tokens(self, access_token: str, refresh_token: str | None) -> None: ...

    def clear(self) -> None: ...


def read_credentials(store: TokenStore) -> Credentials:
    """Take a snapshot of the stored tokens."""
    getter = getattr(store, "get_credentials", None)
    if callable(getter):
        return getter()
    return Credentials(
        access_token=store.get_access_token(),
        refresh_token=store.get_refresh_token(),
    )


class InMemoryTokenStore:
    """Process-local token store guarded by a lock."""

    def __init__(
        self,
        access_token: str | None = None,
        refresh_token: str | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._credentials = Credentials(access_token, refresh_token)

    def get_credentials(self) -> Credentials:
        with self._lock:
            return self._credentials

    def get_access_token(self) -> str | None:
        return self.get_credentials().access_token

    def get_refresh_token(self) -> str | None:
        return self.get_credentials().refresh_token

    def save_tokens(self, access_token: str, refresh_token: str | None) -> None:
        """Replace the stored pair; a ``None`` refresh token keeps the current one."""
        with self._lock:
            self._credentials = Credentials(
                access_token=access_token,
                refresh_token=(
                    refresh_token
                    if refresh_token is not None
                    else self._credentials.refresh_token
                ),
            )

    def clear(self) -> None:
        with self._lock:
            self._credentials = Credentials()
