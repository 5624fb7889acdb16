"""Unit tests for token storage, session events and reachability probes."""

import threading

from yenipara_sdk.events import SessionEvents
from yenipara_sdk.reachability import (
    CallableReachability,
    ReachabilityProbe,
    StaticReachability,
)
from yenipara_sdk.token_store import InMemoryTokenStore, TokenStore, read_credentials
from yenipara_sdk.types import Credentials


class TestInMemoryTokenStore:
    """Tests for InMemoryTokenStore."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(InMemoryTokenStore(), TokenStore)

    def test_save_and_read(self) -> None:
        store = InMemoryTokenStore()
        store.save_tokens("access", "refresh")

        assert store.get_access_token() == "access"
        assert store.get_refresh_token() == "refresh"

    def test_save_without_refresh_keeps_existing(self) -> None:
        store = InMemoryTokenStore("old", "refresh-1")
        store.save_tokens("new", None)

        assert store.get_credentials() == Credentials("new", "refresh-1")

    def test_clear(self) -> None:
        store = InMemoryTokenStore("a", "r")
        store.clear()

        assert store.get_access_token() is None
        assert store.get_refresh_token() is None

    def test_concurrent_saves_never_mix_pairs(self) -> None:
        store = InMemoryTokenStore("a0", "r0")

        def writer(n: int) -> None:
            for i in range(200):
                store.save_tokens(f"a{n}-{i}", f"r{n}-{i}")

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        seen = [store.get_credentials() for _ in range(500)]
        for t in threads:
            t.join()

        for creds in seen:
            assert creds.access_token is not None and creds.refresh_token is not None
            assert creds.access_token[1:] == creds.refresh_token[1:]


class TestReadCredentials:
    """Tests for credential snapshots."""

    def test_uses_getters_for_plain_stores(self) -> None:
        class PlainStore:
            def get_access_token(self) -> str | None:
                return "a"

            def get_refresh_token(self) -> str | None:
                return None

            def save_tokens(self, access_token: str, refresh_token: str | None) -> None:
                pass

            def clear(self) -> None:
                pass

        creds = read_credentials(PlainStore())
        assert creds == Credentials("a", None)
        assert creds.has_access_token
        assert not creds.has_refresh_token

    def test_repr_hides_tokens(self) -> None:
        assert "secret" not in repr(Credentials("secret", "secret-refresh"))


class TestSessionEvents:
    """Tests for the logout event channel."""

    def test_emit_notifies_each_observer_once(self) -> None:
        events = SessionEvents()
        calls: list[str] = []
        events.subscribe(lambda: calls.append("a"))
        events.subscribe(lambda: calls.append("b"))

        events.emit_logout()

        assert calls == ["a", "b"]

    def test_unsubscribe(self) -> None:
        events = SessionEvents()
        calls: list[int] = []
        unsubscribe = events.subscribe(lambda: calls.append(1))

        unsubscribe()
        unsubscribe()
        events.emit_logout()

        assert calls == []
        assert events.subscriber_count == 0

    def test_failing_observer_does_not_block_others(self) -> None:
        events = SessionEvents()
        calls: list[int] = []

        def broken() -> None:
            raise RuntimeError("ui gone")

        events.subscribe(broken)
        events.subscribe(lambda: calls.append(1))

        events.emit_logout()

        assert calls == [1]


class TestReachability:
    """Tests for reachability probes."""

    def test_static_probe(self) -> None:
        probe = StaticReachability()
        assert isinstance(probe, ReachabilityProbe)
        assert probe.is_connected()

        probe.set_connected(False)
        assert not probe.is_connected()

    def test_callable_probe(self) -> None:
        state = {"online": False}
        probe = CallableReachability(lambda: state["online"])

        assert not probe.is_connected()
        state["online"] = True
        assert probe.is_connected()
