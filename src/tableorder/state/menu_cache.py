"""Per-category menu item cache.

The cache is the only place that holds item counts; the cart is derived
from it. Each category list is replaced or edited as a whole by a single
writer (the store), so readers always receive copies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from tableorder.models.menu import MenuItem

_logger = logging.getLogger(__name__)


class CategoryCache:
    """Mapping of category name to the menu items last fetched for it."""

    def __init__(self) -> None:
        self._categories: dict[str, list[MenuItem]] = {}

    def __contains__(self, category: object) -> bool:
        return category in self._categories

    def __len__(self) -> int:
        return len(self._categories)

    def categories(self) -> list[str]:
        return list(self._categories)

    def get(self, category: str) -> list[MenuItem]:
        items = self._categories.get(category)
        if items is None:
            return []
        return list(items)

    def find(self, category: str, item_id: str) -> MenuItem | None:
        for item in self._categories.get(category, ()):
            if item.id == item_id:
                return item
        return None

    def replace(self, category: str, items: Iterable[MenuItem]) -> list[MenuItem]:
        """Store a freshly fetched list for *category*.

        Counts are carried over by id when the category was already cached;
        otherwise every item starts out of the cart. Counts sent by the API
        are never trusted. Items are stamped with *category* so the cache key
        and the item's own category always agree.
        """
        previous = self._categories.get(category)
        previous_counts: dict[str, int] = {}
        if previous is not None:
            previous_counts = {item.id: item.count for item in previous}

        stored: list[MenuItem] = []
        for item in items:
            if item.category != category:
                _logger.debug(
                    "Item %s fetched for category %r declares category %r; using %r",
                    item.id,
                    category,
                    item.category,
                    category,
                )
            stored.append(item.in_category(category).with_count(previous_counts.get(item.id, 0)))

        self._categories[category] = stored
        return list(stored)

    def remove(self, category: str) -> None:
        self._categories.pop(category, None)

    def update_item(
        self,
        category: str,
        item_id: str,
        transform: Callable[[MenuItem], MenuItem | None],
    ) -> MenuItem | None:
        """Apply *transform* to one cached item.

        Returns the new item, or ``None`` when the item is unknown or
        *transform* declined the change by returning ``None``.
        """
        items = self._categories.get(category)
        if items is None:
            return None
        for index, item in enumerate(items):
            if item.id != item_id:
                continue
            updated = transform(item)
            if updated is None:
                return None
            items[index] = updated
            return updated
        return None

    def clear_cart(self) -> int:
        """Reset every cached item to count 0. Returns how many items changed."""
        changed = 0
        for category, items in self._categories.items():
            cleared = [item.cleared() for item in items]
            changed += sum(1 for old, new in zip(items, cleared, strict=True) if old is not new)
            self._categories[category] = cleared
        return changed

    def cart_items(self) -> list[MenuItem]:
        """Items with a positive count across all categories, unique by id.

        When the same id is cached under two categories, the first one in
        cache order wins.
        """
        seen: set[str] = set()
        result: list[MenuItem] = []
        for items in self._categories.values():
            for item in items:
                if item.count <= 0 or item.id in seen:
                    continue
                seen.add(item.id)
                result.append(item)
        return result
