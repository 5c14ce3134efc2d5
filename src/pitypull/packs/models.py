from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..items.models import Item
from ..rarity.table import RarityTier


@dataclass(frozen=True)
class PackRequest:
    """A single purchase: how many pulls, for how many coins, with what floor.

    ``guaranteed_minimum`` applies to the final pull only.
    """

    pull_count: int
    cost: int
    guaranteed_minimum: Optional[str] = None
    pack_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.pull_count < 1:
            raise ValueError("A pack must grant at least one pull")
        if self.cost < 0:
            raise ValueError("Pack cost cannot be negative")


@dataclass(frozen=True)
class PackDefinition:
    """A purchasable pack as offered in the shop."""

    id: str
    name: str
    cost: int
    pull_count: int = 1
    guaranteed_minimum: Optional[str] = None
    description: str = ""
    icon: str = ""

    def to_request(self) -> PackRequest:
        return PackRequest(
            pull_count=self.pull_count,
            cost=self.cost,
            guaranteed_minimum=self.guaranteed_minimum,
            pack_id=self.id,
        )


@dataclass(frozen=True)
class PullResult:
    item: Item
    tier: RarityTier
    is_new: bool
    is_pity: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item_id": self.item.item_id,
            "tier_id": self.tier.id,
            "is_new": self.is_new,
            "is_pity": self.is_pity,
        }


@dataclass(frozen=True)
class Declined:
    """Returned instead of results when a pack cannot be opened.

    Nothing was debited and no pity or ledger state changed.
    """

    reason: str
    message: str
    cost: int
    balance: Optional[int] = None

    @property
    def ok(self) -> bool:
        return False


INSUFFICIENT_FUNDS = "insufficient_funds"
