from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional, Tuple

from ..errors import ConfigError, UnknownTierError

if TYPE_CHECKING:
    from ..items.catalog import Catalog

logger = logging.getLogger(__name__)

PROBABILITY_EPSILON = 1e-6


@dataclass(frozen=True)
class RarityTier:
    """
    One rarity class in a drop table.

    Attributes:
        id: Stable identifier used in saved state and pack definitions.
        base_probability: Chance of this tier on an unconstrained draw, in (0, 1].
        pity_threshold: Consecutive misses after which the tier is guaranteed.
        display_name: Human readable label.
    """

    id: str
    base_probability: float
    pity_threshold: int
    display_name: str = ""

    @property
    def name(self) -> str:
        return self.display_name or self.id.title()


class RarityTable:
    """Validated, immutable ordering of rarity tiers, most common first.

    Construction fails with ConfigError when:
    - there are no tiers, or a tier id is repeated
    - a base probability lies outside (0, 1]
    - the probabilities do not sum to 1 within ``epsilon``
    - pity thresholds are not positive integers strictly increasing with rarity
    - a catalog is supplied and some reachable tier has no items
    """

    def __init__(
        self,
        tiers: Iterable[RarityTier],
        *,
        catalog: Optional["Catalog"] = None,
        epsilon: float = PROBABILITY_EPSILON,
    ) -> None:
        self._tiers: Tuple[RarityTier, ...] = tuple(tiers)
        self._epsilon = epsilon
        self._validate()
        self._by_id: Dict[str, RarityTier] = {t.id: t for t in self._tiers}
        self._rank: Dict[str, int] = {t.id: i for i, t in enumerate(self._tiers)}
        if catalog is not None:
            self.require_pools(catalog)
        logger.debug("Rarity table ready: %s", [t.id for t in self._tiers])

    def _validate(self) -> None:
        if not self._tiers:
            raise ConfigError("Rarity table must define at least one tier")

        seen = set()
        for tier in self._tiers:
            if tier.id in seen:
                raise ConfigError(f"Duplicate rarity tier id: {tier.id!r}")
            seen.add(tier.id)
            if not (0.0 < tier.base_probability <= 1.0):
                raise ConfigError(
                    f"Tier {tier.id!r} has base probability {tier.base_probability}; expected a value in (0, 1]"
                )
            if isinstance(tier.pity_threshold, bool) or not isinstance(tier.pity_threshold, int):
                raise ConfigError(f"Tier {tier.id!r} pity threshold must be an integer")
            if tier.pity_threshold <= 0:
                raise ConfigError(f"Tier {tier.id!r} pity threshold must be positive")

        total = math.fsum(t.base_probability for t in self._tiers)
        if abs(total - 1.0) > self._epsilon:
            raise ConfigError(f"Base probabilities sum to {total:.9f}; expected 1.0 ± {self._epsilon}")

        for common, rarer in zip(self._tiers, self._tiers[1:]):
            if rarer.pity_threshold <= common.pity_threshold:
                raise ConfigError(
                    "Pity thresholds must strictly increase with rarity: "
                    f"{common.id}={common.pity_threshold} >= {rarer.id}={rarer.pity_threshold}"
                )

    def require_pools(self, catalog: "Catalog") -> None:
        """Raise ConfigError if any reachable tier has an empty item pool."""
        for tier in self.reachable():
            if not catalog.items_for_tier(tier.id):
                raise ConfigError(f"No items available for reachable tier {tier.id!r}")

    def reachable(self) -> List[RarityTier]:
        # every validated tier has a non-zero probability, so every tier can drop
        return list(self._tiers)

    def __iter__(self) -> Iterator[RarityTier]:
        return iter(self._tiers)

    def __len__(self) -> int:
        return len(self._tiers)

    def __contains__(self, tier_id: object) -> bool:
        return tier_id in self._by_id

    def ascending(self) -> List[RarityTier]:
        """Tiers ordered most common to rarest."""
        return list(self._tiers)

    def descending(self) -> List[RarityTier]:
        """Tiers ordered rarest to most common."""
        return list(reversed(self._tiers))

    def get(self, tier_id: str) -> RarityTier:
        try:
            return self._by_id[tier_id]
        except KeyError:
            raise UnknownTierError(tier_id) from None

    def rank(self, tier_id: str) -> int:
        """Position of the tier, 0 being the most common."""
        try:
            return self._rank[tier_id]
        except KeyError:
            raise UnknownTierError(tier_id) from None

    def at_or_above(self, tier_id: str) -> List[RarityTier]:
        """Tiers at least as rare as ``tier_id``, most common first."""
        return list(self._tiers[self.rank(tier_id):])

    def ids(self) -> List[str]:
        return [t.id for t in self._tiers]

    @property
    def rarest(self) -> RarityTier:
        return self._tiers[-1]

    @property
    def most_common(self) -> RarityTier:
        return self._tiers[0]

    def __repr__(self) -> str:
        return f"RarityTable({[t.id for t in self._tiers]!r})"
