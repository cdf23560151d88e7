"""Menu, cart and session state for the ordering screen.

:class:`OrderingStore` is the only writer of the category cache and of the
mirrored socket session. UI code reads its properties and subscribes with
:meth:`~tableorder.state.observable.ChangeNotifier.add_listener`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from tableorder.config import StoreConfig
from tableorder.exceptions import (
    CartEmptyError,
    NotConnectedError,
    StoreDisposedError,
    TableNotRegisteredError,
)
from tableorder.models.menu import ItemCategory, MenuItem
from tableorder.models.order import CartSummary, OrderType
from tableorder.protocols import MenuApi, SocketClient
from tableorder.state.menu_cache import CategoryCache
from tableorder.state.observable import ChangeNotifier
from tableorder.state.socket_bridge import SessionState, SocketEventBridge

_logger = logging.getLogger(__name__)


def _as_menu_item(value: Any) -> MenuItem:
    if isinstance(value, MenuItem):
        return value
    return MenuItem.model_validate(value)


class OrderingStore(ChangeNotifier):
    """State holder for the ordering screen.

    Usage::

        async with OrderingStore(api, socket, StoreConfig.from_env()) as store:
            remove = store.add_listener(render)
            store.increment_item(store.displayed_items[0])
            response = await store.place_order()
    """

    def __init__(
        self,
        api: MenuApi,
        socket: SocketClient,
        config: StoreConfig | None = None,
    ) -> None:
        super().__init__()
        self._api = api
        self._socket = socket
        self._config = config if config is not None else StoreConfig()
        self._cache = CategoryCache()

        self._is_loading = True
        self._fetch_error_message: str | None = None
        self._ordering_index = 0
        self._current_index = 0
        self._currently_fetching: str | None = None
        self._pending_fetches: set[asyncio.Task[None]] = set()
        self._started = False

        self._session = SessionState(
            connected=socket.is_connected,
            session_id=socket.session_id,
            table_id=socket.table_id,
        )
        self._bridge = SocketEventBridge(
            socket,
            self._session,
            on_change=self.notify_listeners,
            on_session_ended=self.cancel_order,
            currency=self._config.currency,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> OrderingStore:
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.dispose()

    async def start(self) -> None:
        """Listen to the socket client and load the first category."""
        self._require_active()
        if self._started:
            return
        self._started = True
        self._bridge.attach()

        categories = self._config.categories
        if not categories:
            self._is_loading = False
            self._fetch_error_message = "No categories defined."
            self.notify_listeners()
            return
        if not self._config.fetch_on_start:
            self._is_loading = False
            self.notify_listeners()
            return
        await self.fetch_menu_items(categories[0].name)

    def dispose(self) -> None:
        """Release socket subscriptions and listeners.

        Fetches scheduled by :meth:`change_category` are cancelled; a fetch
        awaited directly by the caller finishes without touching state.
        """
        if self.is_disposed:
            return
        self._bridge.detach()
        for task in list(self._pending_fetches):
            if not task.done():
                task.cancel()
        self._pending_fetches.clear()
        super().dispose()
        _logger.debug("Ordering store disposed")

    def _require_active(self) -> None:
        if self.is_disposed:
            raise StoreDisposedError("Ordering store was used after being disposed")

    # ------------------------------------------------------------------
    # Menu and cart state
    # ------------------------------------------------------------------

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def categories(self) -> tuple[ItemCategory, ...]:
        return self._config.categories

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def fetch_error_message(self) -> str | None:
        return self._fetch_error_message

    @property
    def ordering_index(self) -> int:
        return self._ordering_index

    @property
    def order_type(self) -> OrderType:
        return OrderType.from_index(self._ordering_index)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_category_name(self) -> str | None:
        categories = self._config.categories
        if 0 <= self._current_index < len(categories):
            return categories[self._current_index].name
        return None

    @property
    def displayed_items(self) -> list[MenuItem]:
        """Items of the active category (a copy; empty until fetched)."""
        name = self.current_category_name
        if name is None:
            return []
        return self._cache.get(name)

    @property
    def items_in_cart(self) -> list[MenuItem]:
        return self._cache.cart_items()

    @property
    def total_items_in_cart(self) -> int:
        return sum(item.count for item in self.items_in_cart)

    @property
    def total_amount_cart(self) -> float:
        return sum((item.price * item.count for item in self.items_in_cart), 0.0)

    @property
    def is_cart_selected(self) -> bool:
        return self.total_items_in_cart > 0

    @property
    def cart_summary(self) -> CartSummary:
        return CartSummary.from_items(self.items_in_cart)

    def cached_items(self, category: str) -> list[MenuItem]:
        """Items cached for *category*, whether or not it is active."""
        return self._cache.get(category)

    # ------------------------------------------------------------------
    # Session state (mirrored from the socket client)
    # ------------------------------------------------------------------

    @property
    def socket_connected(self) -> bool:
        return self._session.connected

    @property
    def is_connecting(self) -> bool:
        return self._socket.is_connecting

    @property
    def socket_error_message(self) -> str | None:
        return self._session.error_message

    @property
    def current_session_id(self) -> str | None:
        return self._session.session_id

    @property
    def table_id(self) -> str | None:
        """Mirrored table id, falling back to the socket client's value."""
        if self._session.table_id is not None:
            return self._session.table_id
        return self._socket.table_id

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def change_category(self, index: int) -> asyncio.Task[None] | None:
        """Switch the active category and schedule its fetch.

        Returns the fetch task, or ``None`` when *index* is the current one
        or out of range. Must be called from a running event loop.
        """
        self._require_active()
        if index == self._current_index or not 0 <= index < len(self._config.categories):
            return None
        loop = asyncio.get_running_loop()
        self._current_index = index
        name = self._config.categories[index].name
        task = loop.create_task(self.fetch_menu_items(name))
        self._pending_fetches.add(task)
        task.add_done_callback(self._pending_fetches.discard)
        return task

    def set_ordering_index(self, index: int) -> None:
        self._require_active()
        if index != self._ordering_index:
            self._ordering_index = index
            self.notify_listeners()

    async def fetch_menu_items(self, category: str) -> None:
        """Load *category* into the cache.

        Only the most recently requested category may change state: a
        response for a category that is no longer being fetched is dropped
        without notifying.
        """
        self._require_active()
        self._is_loading = True
        self._fetch_error_message = None
        self._currently_fetching = category
        _logger.debug("Fetching menu items for category=%s", category)
        self.notify_listeners()

        try:
            fetched = await self._api.get_menu_items_by_category(category)
            items = [_as_menu_item(value) for value in fetched]
        except Exception as exc:
            if not self._is_current_fetch(category):
                _logger.debug("Discarding stale fetch failure for category=%s", category, exc_info=True)
                return
            self._fetch_error_message = f"Failed to load items. {exc}"
            self._is_loading = False
            self._cache.remove(category)
            _logger.debug("Fetching category=%s failed", category, exc_info=True)
        else:
            if not self._is_current_fetch(category):
                _logger.debug("Discarding stale fetch result for category=%s", category)
                return
            stored = self._cache.replace(category, items)
            self._is_loading = False
            _logger.debug("Cached %d items for category=%s", len(stored), category)
        self.notify_listeners()

    def _is_current_fetch(self, category: str) -> bool:
        return not self.is_disposed and category == self._currently_fetching

    def update_item_count(self, item: MenuItem, change: int) -> None:
        """Add *change* to the cached count of *item*.

        A change that would make the count negative is ignored.
        """
        self._require_active()
        if item.category not in self._cache:
            _logger.warning(
                "Attempted to update item count for category %r not found in cache",
                item.category,
            )
            return

        def _apply(current: MenuItem) -> MenuItem | None:
            new_count = current.count + change
            if new_count < 0:
                return None
            return current.with_count(new_count)

        if self._cache.update_item(item.category, item.id, _apply) is not None:
            self.notify_listeners()

    def increment_item(self, item: MenuItem) -> None:
        self.update_item_count(item, 1)

    def decrement_item(self, item: MenuItem) -> None:
        self.update_item_count(item, -1)

    def toggle_item_selection(self, item: MenuItem) -> None:
        """Select with a count of at least 1, or deselect and zero the count."""
        self._require_active()
        if item.category not in self._cache:
            _logger.warning(
                "Attempted to toggle selection for category %r not found in cache",
                item.category,
            )
            return

        def _toggle(current: MenuItem) -> MenuItem:
            if current.is_selected:
                return current.with_count(0)
            return current.with_count(max(current.count, 1))

        if self._cache.update_item(item.category, item.id, _toggle) is not None:
            self.notify_listeners()

    def cancel_order(self) -> None:
        """Empty the cart across every cached category."""
        self._require_active()
        cleared = self._cache.clear_cart()
        _logger.debug("Cart cleared (%d items reset)", cleared)
        self.notify_listeners()

    async def place_order(self) -> Mapping[str, Any]:
        """Submit the cart and return the API response.

        Raises
        ------
        CartEmptyError
            No item has a positive count.
        TableNotRegisteredError
            No table id is known.
        NotConnectedError
            The socket is not connected.
        StoreDisposedError
            The store has been disposed.

        Errors from the API client propagate unchanged. The cart is left
        as-is; the caller clears it once the order is acknowledged.
        """
        self._require_active()
        items = self.items_in_cart
        order_type = self.order_type
        table_id = self.table_id

        if not items:
            raise CartEmptyError()
        if table_id is None:
            raise TableNotRegisteredError()
        if not self._session.connected:
            raise NotConnectedError()

        _logger.debug(
            "Placing %s order for table=%s with %d items",
            order_type.value,
            table_id,
            len(items),
        )
        return await self._api.create_order(items=items, order_type=order_type, table_id=table_id)

    def end_current_session(self) -> None:
        """Ask the socket client to close the session.

        The session id is cleared when the session-ended event arrives.
        """
        self._require_active()
        if self._session.session_id is None:
            self._session.error_message = "No active session to end."
            self.notify_listeners()
            return
        if not self._session.connected:
            self._session.error_message = "Not connected to server."
            self.notify_listeners()
            return
        self._socket.end_current_session()

    async def manual_reconnect(self) -> None:
        self._require_active()
        self._session.error_message = "Attempting manual reconnect..."
        self.notify_listeners()
        await self._socket.manual_reconnect()
