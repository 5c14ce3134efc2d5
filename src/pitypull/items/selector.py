from __future__ import annotations

import logging

from ..core.rng import RandomSource
from ..rarity.table import RarityTable, RarityTier
from .catalog import Catalog
from .models import Item

logger = logging.getLogger(__name__)


class ItemSelector:
    """Uniformly picks one catalog item for a resolved tier.

    Empty pools are rejected here, at construction, so pick() never fails for
    a tier of the validated table.
    """

    def __init__(self, table: RarityTable, catalog: Catalog, rng: RandomSource) -> None:
        table.require_pools(catalog)
        self.table = table
        self.catalog = catalog
        self.rng = rng

    def pick(self, tier: RarityTier) -> Item:
        pool = self.catalog.items_for_tier(tier.id)
        # one uniform draw keeps any [0, 1) source usable, including scripted ones
        index = min(int(self.rng.random() * len(pool)), len(pool) - 1)
        item = pool[index]
        logger.debug("Picked %s from %d %s items", item.item_id, len(pool), tier.id)
        return item
