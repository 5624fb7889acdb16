"""Session event channel between the request pipeline and its UI consumers."""

from __future__ import annotations

import threading
from typing import Callable

from .telemetry import get_logger

LogoutCallback = Callable[[], None]


class SessionEvents:
    """Observer registry for session-level events.

    The pipeline emits ``logout`` when credentials cannot be recovered; the UI
    layer subscribes to clear its local state and show the sign-in screen.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._logout_callbacks: list[LogoutCallback] = []
        self._logger = get_logger()

    def subscribe(self, callback: LogoutCallback) -> Callable[[], None]:
        """Register a logout observer.

        Returns:
            A function that removes the observer again.
        """
        with self._lock:
            self._logout_callbacks.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._logout_callbacks:
                    self._logout_callbacks.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._logout_callbacks)

    def emit_logout(self) -> None:
        """Notify every logout observer once."""
        with self._lock:
            callbacks = list(self._logout_callbacks)

        self._logger.info("Session logout emitted", observers=len(callbacks))
        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                self._logger.error(
                    "Logout observer failed",
                    observer=getattr(callback, "__qualname__", repr(callback)),
                    error=str(e),
                )
