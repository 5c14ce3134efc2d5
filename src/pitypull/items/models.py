from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Item:
    """
    A collectible sticker that packs can grant.

    Only the identifier and the rarity tier matter to the engine; the rest is
    display metadata carried through to results.
    """

    item_id: str
    name: str
    tier_id: str
    emoji: str = ""
    category: str = "general"


__all__ = ["Item"]
