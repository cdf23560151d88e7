"""Store configuration for tableorder."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Iterable
from typing import Any

from tableorder.exceptions import StoreConfigError
from tableorder.models.menu import ItemCategory


_TRUE_WORDS = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "n", "off"})


def _env_flag(name: str, default: bool) -> bool:
    """Read boolean env var *name*; unknown words raise :class:`StoreConfigError`."""
    value = os.environ.get(name)
    if value is None:
        return default
    word = value.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise StoreConfigError(f"{name}: invalid boolean {value!r}")


def parse_categories(value: str) -> tuple[ItemCategory, ...]:
    """Parse a comma-separated category list.

    Each entry is either ``name`` or ``name=image``, e.g.
    ``"burgers=assets/burger.png,pizzas"``. Blank entries are skipped.

    Raises :class:`StoreConfigError` on an entry with an empty name or on
    duplicate names.
    """
    categories: list[ItemCategory] = []
    seen: set[str] = set()
    for chunk in value.split(","):
        entry = chunk.strip()
        if not entry:
            continue
        name, _, image = entry.partition("=")
        name = name.strip()
        if not name:
            raise StoreConfigError(f"Category entry without a name: {entry!r}")
        if name in seen:
            raise StoreConfigError(f"Duplicate category: {name!r}")
        seen.add(name)
        categories.append(ItemCategory(name=name, image=image.strip() or None))
    return tuple(categories)


def _coerce_categories(value: Iterable[ItemCategory | str] | str) -> tuple[ItemCategory, ...]:
    if isinstance(value, str):
        return parse_categories(value)
    result: list[ItemCategory] = []
    for item in value:
        result.append(item if isinstance(item, ItemCategory) else ItemCategory(name=item))
    return tuple(result)


@dataclasses.dataclass(frozen=True)
class StoreConfig:
    """Store configuration.

    Parameters
    ----------
    categories : tuple of ItemCategory
        Menu categories in display order. The first one is fetched on
        start. An empty tuple is allowed; the store then reports
        ``"No categories defined."``.
    currency : str
        Currency label used in the session-end bill summary.
    fetch_on_start : bool
        Fetch the first category when the store starts.
    """

    categories: tuple[ItemCategory, ...] = ()
    currency: str = "DZD"
    fetch_on_start: bool = True

    def __post_init__(self) -> None:
        # Accept plain names or a list for convenience; store as a tuple.
        object.__setattr__(self, "categories", _coerce_categories(self.categories))
        names = [c.name for c in self.categories]
        if len(names) != len(set(names)):
            raise StoreConfigError("Category names must be unique")

    @property
    def category_names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self.categories)

    @classmethod
    def from_env(cls, **overrides: Any) -> StoreConfig:
        """Create configuration from environment variables.

        Reads ``TABLEORDER_CATEGORIES``, ``TABLEORDER_CURRENCY`` and
        ``TABLEORDER_FETCH_ON_START``. Explicit keyword arguments override
        environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        StoreConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        categories_env = env.get("TABLEORDER_CATEGORIES")
        if categories_env is not None and "categories" not in overrides:
            config_kwargs["categories"] = parse_categories(categories_env)

        currency_env = env.get("TABLEORDER_CURRENCY")
        if currency_env is not None and "currency" not in overrides:
            currency = currency_env.strip()
            if not currency:
                raise StoreConfigError("TABLEORDER_CURRENCY must be non-empty")
            config_kwargs["currency"] = currency

        if "fetch_on_start" not in overrides:
            config_kwargs["fetch_on_start"] = _env_flag("TABLEORDER_FETCH_ON_START", True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
