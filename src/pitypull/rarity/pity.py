from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

from .table import RarityTable, RarityTier

logger = logging.getLogger(__name__)


class PityTracker:
    """Per-tier count of pulls since that tier was last produced.

    One tracker belongs to exactly one session. Counters only change through
    record_pull(): the resolved tier drops to 0 and every other tier goes up by 1.
    """

    def __init__(self, table: RarityTable, counts: Optional[Mapping[str, int]] = None) -> None:
        self.table = table
        self._counts: Dict[str, int] = {t.id: 0 for t in table}
        if counts:
            for tier_id, value in counts.items():
                if tier_id not in self._counts:
                    logger.debug("Ignoring pity counter for unknown tier %r", tier_id)
                    continue
                self._counts[tier_id] = max(0, int(value))

    def pulls_since(self, tier_id: str) -> int:
        return self._counts[self.table.get(tier_id).id]

    def is_pity_triggered(self, tier: RarityTier) -> bool:
        return self._counts[tier.id] >= tier.pity_threshold

    def record_pull(self, resolved: RarityTier) -> None:
        for tier_id in self._counts:
            if tier_id == resolved.id:
                self._counts[tier_id] = 0
            else:
                self._counts[tier_id] += 1
        logger.debug("Pity after %s: %s", resolved.id, self._counts)

    def snapshot(self) -> Dict[str, int]:
        """Flat tier id -> counter map, safe to serialize."""
        return dict(self._counts)

    def __repr__(self) -> str:
        return f"PityTracker({self._counts!r})"
