from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Protocol

from ..errors import PityPullError
from .models import Item

logger = logging.getLogger(__name__)


class Catalog(Protocol):
    """Read side of the item catalog consumed by the engine."""

    def items_for_tier(self, tier_id: str) -> List[Item]:
        ...

    def owned_quantity(self, item_id: str) -> int:
        ...


class InMemoryCatalog:
    """Item catalog with lookups by id and tier and a count of owned copies.

    Pools preserve insertion order so seeded selections stay reproducible.
    """

    def __init__(self, items: Iterable[Item] = (), owned: Optional[Dict[str, int]] = None) -> None:
        self._items: Dict[str, Item] = {}
        self._pools: Dict[str, List[Item]] = {}
        self._owned: Dict[str, int] = {}
        for item in items:
            self.add(item)
        for item_id, qty in (owned or {}).items():
            if item_id in self._items and qty > 0:
                self._owned[item_id] = int(qty)

    def add(self, item: Item) -> None:
        if item.item_id in self._items:
            raise ValueError(f"Duplicate item id: {item.item_id}")
        self._items[item.item_id] = item
        self._pools.setdefault(item.tier_id, []).append(item)

    def get(self, item_id: str) -> Item:
        try:
            return self._items[item_id]
        except KeyError as e:
            raise PityPullError(f"Unknown item id: {item_id}") from e

    def has(self, item_id: str) -> bool:
        return item_id in self._items

    def items_for_tier(self, tier_id: str) -> List[Item]:
        return list(self._pools.get(tier_id, []))

    def tier_ids(self) -> List[str]:
        return list(self._pools)

    def owned_quantity(self, item_id: str) -> int:
        return self._owned.get(item_id, 0)

    def grant(self, item: Item, quantity: int = 1) -> int:
        if quantity <= 0:
            raise ValueError("Quantity to grant must be positive")
        total = self._owned.get(item.item_id, 0) + quantity
        self._owned[item.item_id] = total
        logger.debug("Granted %dx %s (owned: %d)", quantity, item.item_id, total)
        return total

    def owned(self) -> Dict[str, int]:
        return dict(self._owned)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items.values())
