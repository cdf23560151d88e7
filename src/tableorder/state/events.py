"""Broadcast event streams.

Socket clients expose their notifications as event sources with a
``listen(callback) -> Subscription`` method. :class:`EventStream` is a
ready-made implementation that a socket client can own and ``emit`` into;
anything with the same shape works with the store.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable
from typing import Generic, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription(Generic[T]):
    """Handle returned by :meth:`EventStream.listen`."""

    def __init__(self, stream: EventStream[T], callback: Callable[[T], None]) -> None:
        self._stream: EventStream[T] | None = stream
        self._callback = callback

    @property
    def is_active(self) -> bool:
        return self._stream is not None

    def cancel(self) -> None:
        """Stop receiving events. Safe to call more than once."""
        stream = self._stream
        self._stream = None
        if stream is not None:
            stream._remove(self)

    def _deliver(self, value: T) -> None:
        self._callback(value)


class EventStream(Generic[T]):
    """Synchronous broadcast stream: every active subscription sees every event."""

    def __init__(self, name: str = "") -> None:
        self._name = name
        self._subscriptions: list[Subscription[T]] = []
        self._closed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def listener_count(self) -> int:
        return len(self._subscriptions)

    def listen(self, callback: Callable[[T], None]) -> Subscription[T]:
        if self._closed:
            raise RuntimeError(f"Event stream {self._name!r} is closed")
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    def emit(self, value: T) -> None:
        if self._closed:
            raise RuntimeError(f"Event stream {self._name!r} is closed")
        for subscription in list(self._subscriptions):
            if not subscription.is_active:
                continue
            try:
                subscription._deliver(value)
            except Exception:
                _logger.debug("Event stream %r subscriber failed", self._name, exc_info=True)

    def close(self) -> None:
        """Cancel every subscription and refuse further events."""
        for subscription in list(self._subscriptions):
            subscription.cancel()
        self._closed = True

    def _remove(self, subscription: Subscription[T]) -> None:
        with contextlib.suppress(ValueError):
            self._subscriptions.remove(subscription)
