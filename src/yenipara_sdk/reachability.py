"""Network reachability probes consulted before every request."""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class ReachabilityProbe(Protocol):
    """Reports whether the device currently has network connectivity."""

    def is_connected(self) -> bool: ...


class StaticReachability:
    """Probe whose answer is set explicitly, e.g. by a platform path monitor."""

    def __init__(self, connected: bool = True) -> None:
        self._connected = connected

    def set_connected(self, connected: bool) -> None:
        self._connected = connected

    def is_connected(self) -> bool:
        return self._connected


class CallableReachability:
    """Adapts a zero-argument callable to the probe protocol."""

    def __init__(self, check: Callable[[], bool]) -> None:
        self._check = check

    def is_connected(self) -> bool:
        return bool(self._check())
