from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.rng import RandomSource
from .pity import PityTracker
from .table import RarityTable, RarityTier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Outcome of one pull's tier resolution.

    Attributes:
        tier: The resolved rarity tier.
        is_pity: True when the tier was forced by its pity threshold.
        fallback: True when the weighted walk never exceeded the draw and the
            rarest walked tier was returned instead.
    """

    tier: RarityTier
    is_pity: bool = False
    fallback: bool = False


class DropResolver:
    """
    Resolves exactly one rarity tier per call.

    Order of precedence:
    1. Pity, scanned rarest first so simultaneous triggers favour the rarer tier.
       With a guaranteed minimum only tiers at or above the floor are scanned.
    2. Weighted draw over tiers at or above the guaranteed minimum, with their
       base probabilities renormalised to sum to 1.
    3. Weighted draw over every tier.

    Every resolution is recorded on the PityTracker before returning.
    """

    def __init__(self, table: RarityTable, tracker: PityTracker, rng: RandomSource) -> None:
        if tracker.table is not table:
            raise ValueError("PityTracker must be built for the same RarityTable")
        self.table = table
        self.tracker = tracker
        self.rng = rng

    def resolve(self, guaranteed_minimum: Optional[str] = None) -> Resolution:
        if guaranteed_minimum is None:
            candidates = self.table.ascending()
        else:
            candidates = self.table.at_or_above(guaranteed_minimum)

        resolution = self._pity(candidates)
        if resolution is None:
            resolution = self._draw(candidates, renormalize=guaranteed_minimum is not None)

        self.tracker.record_pull(resolution.tier)
        return resolution

    def _pity(self, candidates: Sequence[RarityTier]) -> Optional[Resolution]:
        for tier in reversed(candidates):
            if self.tracker.is_pity_triggered(tier):
                logger.debug(
                    "Pity triggered for %s after %d pulls",
                    tier.id,
                    self.tracker.pulls_since(tier.id),
                )
                return Resolution(tier=tier, is_pity=True)
        return None

    def _draw(self, candidates: List[RarityTier], renormalize: bool) -> Resolution:
        total = sum(t.base_probability for t in candidates) if renormalize else 1.0
        r = self.rng.random()
        cumulative = 0.0
        for tier in candidates:
            cumulative += tier.base_probability / total
            if cumulative > r:
                return Resolution(tier=tier)
        # Floating point edge: the walk never passed r, take the rarest walked tier
        rarest = candidates[-1]
        logger.debug("Weighted draw r=%r unmatched (cumulative=%r); falling back to %s", r, cumulative, rarest.id)
        return Resolution(tier=rarest, fallback=True)
