"""Custom exception hierarchy for tableorder."""

from __future__ import annotations


class TableOrderError(Exception):
    """Base exception for all tableorder errors."""


class StoreConfigError(TableOrderError):
    """Invalid or missing configuration."""


class StoreDisposedError(TableOrderError):
    """The store (or one of its notifiers) was used after ``dispose()``."""


class MenuFetchError(TableOrderError):
    """Menu items for a category could not be loaded.

    API client implementations may raise this from
    ``get_menu_items_by_category``; the store records any exception the
    same way, so raising it is a convenience rather than a requirement.
    """

    def __init__(self, message: str, *, category: str = "") -> None:
        self.category = category
        super().__init__(message)


class OrderRejectedError(TableOrderError):
    """An order could not be submitted because a precondition failed.

    The message is meant to be shown to the user as-is.
    """


class CartEmptyError(OrderRejectedError):
    """No item in the cart has a positive count."""

    def __init__(self, message: str = "Cart is empty.") -> None:
        super().__init__(message)


class TableNotRegisteredError(OrderRejectedError):
    """Neither the store nor the socket client knows the table id."""

    def __init__(self, message: str = "Table not registered.") -> None:
        super().__init__(message)


class NotConnectedError(OrderRejectedError):
    """The realtime socket is not connected."""

    def __init__(self, message: str = "Not connected to server.") -> None:
        super().__init__(message)
