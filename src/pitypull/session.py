from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Union

from .config.loader import EngineConfig
from .core.rng import RNG, RandomSource
from .economy.events import EventBus
from .economy.wallet import CoinWallet
from .items.catalog import InMemoryCatalog
from .items.selector import ItemSelector
from .packs.ledger import PullLedger
from .packs.models import Declined, PackRequest, PullResult
from .packs.resolver import PackResolver
from .persistence.models import LedgerEntry, SessionSnapshot
from .rarity.pity import PityTracker
from .rarity.resolver import DropResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PityStatus:
    tier_id: str
    pulls_since_last: int
    threshold: int
    percentage: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class PullSession:
    """One user's pack-opening engine.

    Owns the pity tracker, ledger and wallet for a single user; nothing here is
    shared between sessions. Calls must not overlap: each pack is resolved
    completely before the next one starts.
    """

    def __init__(
        self,
        config: EngineConfig,
        *,
        rng: Optional[RandomSource] = None,
        catalog: Optional[InMemoryCatalog] = None,
        wallet: Optional[CoinWallet] = None,
        tracker: Optional[PityTracker] = None,
        ledger: Optional[PullLedger] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.config = config
        self.table = config.table
        self.rng = rng if rng is not None else RNG()
        self.event_bus = event_bus or EventBus()
        self.catalog = catalog if catalog is not None else config.build_catalog()
        self.wallet = wallet if wallet is not None else CoinWallet(event_bus=self.event_bus, _amount=config.starting_coins)
        self.tracker = tracker if tracker is not None else PityTracker(self.table)
        self.ledger = ledger if ledger is not None else PullLedger(config.ledger_capacity)

        self.drops = DropResolver(self.table, self.tracker, self.rng)
        self.selector = ItemSelector(self.table, self.catalog, self.rng)
        self.packs = PackResolver(
            self.drops,
            self.selector,
            self.wallet,
            ledger=self.ledger,
            event_bus=self.event_bus,
        )

    @classmethod
    def from_config(
        cls,
        config: EngineConfig,
        rng: Optional[RandomSource] = None,
        snapshot: Optional[SessionSnapshot] = None,
        **kwargs: Any,
    ) -> "PullSession":
        """Build a session, optionally resuming pity, ledger and collection state."""
        if snapshot is None:
            return cls(config, rng=rng, **kwargs)

        catalog = config.build_catalog(owned={k: v for k, v in snapshot.owned.items() if v > 0})
        tracker = PityTracker(config.table, snapshot.pity)
        ledger = PullLedger(config.ledger_capacity)
        restored: List[PullResult] = []
        for entry in snapshot.ledger:
            if entry.tier_id not in config.table or not catalog.has(entry.item_id):
                logger.debug("Dropping ledger entry for unknown %s/%s", entry.tier_id, entry.item_id)
                continue
            restored.append(
                PullResult(
                    item=catalog.get(entry.item_id),
                    tier=config.table.get(entry.tier_id),
                    is_new=entry.is_new,
                    is_pity=entry.is_pity,
                )
            )
        ledger.restore(restored[: config.ledger_capacity])
        logger.info("Session restored: pity=%s ledger=%d", tracker.snapshot(), len(ledger))
        return cls(config, rng=rng, catalog=catalog, tracker=tracker, ledger=ledger, **kwargs)

    def open_pack(self, pack: Union[str, PackRequest]) -> Union[List[PullResult], Declined]:
        """Open a configured pack by id, or an ad hoc PackRequest."""
        request = self.config.pack(pack).to_request() if isinstance(pack, str) else pack
        outcome = self.packs.open_pack(request)
        if isinstance(outcome, Declined):
            return outcome
        for result in outcome:
            self.catalog.grant(result.item)
        return outcome

    def add_coins(self, amount: int, reason: str = "grant") -> int:
        return self.wallet.credit(amount, reason=reason)

    @property
    def coins(self) -> int:
        return self.wallet.amount

    def get_pity_status(self) -> List[PityStatus]:
        statuses = []
        for tier in self.table:
            pulls = self.tracker.pulls_since(tier.id)
            statuses.append(
                PityStatus(
                    tier_id=tier.id,
                    pulls_since_last=pulls,
                    threshold=tier.pity_threshold,
                    percentage=min(100, int(round(pulls / tier.pity_threshold * 100))),
                )
            )
        return statuses

    def get_ledger(self, limit: Optional[int] = None) -> List[PullResult]:
        return self.ledger.entries(limit)

    def get_rarity_stats(self) -> List[Dict[str, Any]]:
        """Per-tier summary for a drop-rate panel, based on the retained ledger."""
        counts: Dict[str, int] = {t.id: 0 for t in self.table}
        for result in self.ledger:
            counts[result.tier.id] = counts.get(result.tier.id, 0) + 1
        stats = []
        for tier, status in zip(self.table, self.get_pity_status()):
            stats.append(
                {
                    "tier_id": tier.id,
                    "name": tier.name,
                    "pulls": counts[tier.id],
                    "pity_progress": status.pulls_since_last,
                    "pity_threshold": status.threshold,
                    "pity_percentage": status.percentage,
                    "base_rate": tier.base_probability * 100,
                }
            )
        return stats

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            pity=self.tracker.snapshot(),
            ledger=[LedgerEntry(**entry) for entry in self.ledger.snapshot()],
            owned=self.catalog.owned(),
        )
