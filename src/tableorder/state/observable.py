"""Listener registry for UI-facing state holders."""

from __future__ import annotations

import logging
from collections.abc import Callable

from tableorder.exceptions import StoreDisposedError

_logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class ChangeNotifier:
    """Holds zero-argument listeners and calls them on :meth:`notify_listeners`.

    ``add_listener`` returns a callable that removes the listener again, so
    callers can hold on to either the listener or the remover. A listener
    that raises is logged and does not stop the others from being called.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self._disposed = False

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def has_listeners(self) -> bool:
        return bool(self._listeners)

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        if self._disposed:
            raise StoreDisposedError(f"{type(self).__name__} was used after being disposed")
        self._listeners.append(listener)

        def _remove() -> None:
            self.remove_listener(listener)

        return _remove

    def remove_listener(self, listener: Listener) -> None:
        """Remove one registration of *listener*; unknown listeners are ignored."""
        for i, candidate in enumerate(self._listeners):
            if candidate is listener:
                del self._listeners[i]
                return

    def notify_listeners(self) -> None:
        if self._disposed:
            return
        # Snapshot: listeners may unsubscribe while being notified.
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                _logger.debug("Listener %r failed", listener, exc_info=True)

    def dispose(self) -> None:
        self._listeners.clear()
        self._disposed = True
