from __future__ import annotations

import logging

import pytest

from tableorder.exceptions import StoreDisposedError
from tableorder.state.events import EventStream
from tableorder.state.observable import ChangeNotifier


def test_event_stream_broadcasts_to_every_subscriber() -> None:
    stream: EventStream[int] = EventStream("numbers")
    first: list[int] = []
    second: list[int] = []
    stream.listen(first.append)
    stream.listen(second.append)

    stream.emit(1)
    stream.emit(2)

    assert first == [1, 2]
    assert second == [1, 2]
    assert stream.listener_count == 2


def test_cancelled_subscription_stops_receiving() -> None:
    stream: EventStream[str] = EventStream()
    seen: list[str] = []
    subscription = stream.listen(seen.append)

    stream.emit("a")
    subscription.cancel()
    subscription.cancel()
    stream.emit("b")

    assert seen == ["a"]
    assert not subscription.is_active
    assert stream.listener_count == 0


def test_failing_subscriber_does_not_block_others(caplog: pytest.LogCaptureFixture) -> None:
    stream: EventStream[int] = EventStream("numbers")
    seen: list[int] = []

    def _boom(_value: int) -> None:
        raise RuntimeError("boom")

    stream.listen(_boom)
    stream.listen(seen.append)

    with caplog.at_level(logging.DEBUG, logger="tableorder.state.events"):
        stream.emit(7)

    assert seen == [7]
    assert "subscriber failed" in caplog.text


def test_closed_stream_rejects_listen_and_emit() -> None:
    stream: EventStream[int] = EventStream("numbers")
    subscription = stream.listen(lambda _v: None)
    stream.close()

    assert stream.is_closed
    assert not subscription.is_active
    with pytest.raises(RuntimeError):
        stream.emit(1)
    with pytest.raises(RuntimeError):
        stream.listen(lambda _v: None)


def test_change_notifier_add_remove_and_dispose() -> None:
    notifier = ChangeNotifier()
    calls: list[str] = []

    def _first() -> None:
        calls.append("first")

    remove_second = notifier.add_listener(lambda: calls.append("second"))
    notifier.add_listener(_first)

    notifier.notify_listeners()
    remove_second()
    notifier.notify_listeners()
    notifier.remove_listener(_first)
    notifier.notify_listeners()

    assert calls == ["second", "first", "first"]
    assert not notifier.has_listeners

    notifier.dispose()
    notifier.notify_listeners()
    assert notifier.is_disposed
    with pytest.raises(StoreDisposedError):
        notifier.add_listener(_first)


def test_listener_removing_itself_during_notify() -> None:
    notifier = ChangeNotifier()
    calls: list[str] = []
    remove: list[object] = []

    def _once() -> None:
        calls.append("once")
        remove[0]()  # type: ignore[operator]

    remove.append(notifier.add_listener(_once))
    notifier.add_listener(lambda: calls.append("always"))

    notifier.notify_listeners()
    notifier.notify_listeners()

    assert calls == ["once", "always", "always"]
