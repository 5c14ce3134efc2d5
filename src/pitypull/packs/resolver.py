from __future__ import annotations

import logging
from typing import Callable, List, Optional, Union

from ..economy.events import EventBus, PackDeclinedEvent, PackOpenedEvent
from ..economy.wallet import Wallet
from ..items.models import Item
from ..items.selector import ItemSelector
from ..rarity.resolver import DropResolver
from .ledger import PullLedger
from .models import INSUFFICIENT_FUNDS, Declined, PackRequest, PullResult

logger = logging.getLogger(__name__)


class PackResolver:
    """Turns a paid pack request into an ordered list of pulls.

    The guaranteed minimum, if any, only constrains the last pull. Pulls are
    resolved strictly in sequence so each one sees the pity state left by the
    previous pull of the same pack.
    """

    def __init__(
        self,
        drops: DropResolver,
        selector: ItemSelector,
        wallet: Wallet,
        *,
        ledger: Optional[PullLedger] = None,
        is_new: Optional[Callable[[Item], bool]] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.drops = drops
        self.selector = selector
        self.wallet = wallet
        self.ledger = ledger
        self.is_new = is_new or (lambda item: selector.catalog.owned_quantity(item.item_id) == 0)
        self.event_bus = event_bus

    def open_pack(self, request: PackRequest) -> Union[List[PullResult], Declined]:
        if request.guaranteed_minimum is not None:
            # unknown floors are a caller error and must not cost anything
            self.drops.table.get(request.guaranteed_minimum)

        if not self.wallet.can_afford(request.cost):
            balance = getattr(self.wallet, "amount", None)
            logger.info(
                "Pack %s declined: cost=%d balance=%s",
                request.pack_id or "<adhoc>",
                request.cost,
                balance,
            )
            if self.event_bus is not None:
                self.event_bus.emit(
                    PackDeclinedEvent(
                        pack_id=request.pack_id,
                        cost=request.cost,
                        reason=INSUFFICIENT_FUNDS,
                        balance=balance,
                    )
                )
            return Declined(reason=INSUFFICIENT_FUNDS, message="Not enough coins!", cost=request.cost, balance=balance)

        self.wallet.debit(request.cost)

        results: List[PullResult] = []
        last = request.pull_count - 1
        for i in range(request.pull_count):
            floor = request.guaranteed_minimum if i == last else None
            resolution = self.drops.resolve(floor)
            item = self.selector.pick(resolution.tier)
            results.append(
                PullResult(
                    item=item,
                    tier=resolution.tier,
                    is_new=self.is_new(item),
                    is_pity=resolution.is_pity,
                )
            )

        if self.ledger is not None:
            self.ledger.record(results)

        pity_hits = sum(1 for r in results if r.is_pity)
        logger.info(
            "Opened pack %s: %d pulls, %d pity, tiers=%s",
            request.pack_id or "<adhoc>",
            len(results),
            pity_hits,
            [r.tier.id for r in results],
        )
        if self.event_bus is not None:
            self.event_bus.emit(
                PackOpenedEvent(
                    pack_id=request.pack_id,
                    cost=request.cost,
                    tiers=tuple(r.tier.id for r in results),
                    pity_hits=pity_hits,
                )
            )
        return results
