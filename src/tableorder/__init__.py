"""tableorder - Async state layer for restaurant table ordering."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tableorder")
except PackageNotFoundError:
    __version__ = "0+local"
from tableorder.config import StoreConfig
from tableorder.exceptions import (
    CartEmptyError,
    MenuFetchError,
    NotConnectedError,
    OrderRejectedError,
    StoreConfigError,
    StoreDisposedError,
    TableNotRegisteredError,
    TableOrderError,
)
from tableorder.models import (
    Bill,
    CartSummary,
    ItemCategory,
    MenuItem,
    OrderType,
    SessionEnded,
    SessionStarted,
    TableRegistered,
)
from tableorder.protocols import EventSource, MenuApi, SocketClient
from tableorder.state.events import EventStream, Subscription
from tableorder.state.observable import ChangeNotifier
from tableorder.state.store import OrderingStore

__all__ = [
    "__version__",
    "Bill",
    "CartEmptyError",
    "CartSummary",
    "ChangeNotifier",
    "EventSource",
    "EventStream",
    "ItemCategory",
    "MenuApi",
    "MenuFetchError",
    "MenuItem",
    "NotConnectedError",
    "OrderRejectedError",
    "OrderType",
    "OrderingStore",
    "SessionEnded",
    "SessionStarted",
    "SocketClient",
    "StoreConfig",
    "StoreConfigError",
    "StoreDisposedError",
    "Subscription",
    "TableNotRegisteredError",
    "TableOrderError",
    "TableRegistered",
]
