import logging
from dataclasses import dataclass, field
from typing import Protocol

from .events import CoinsChangedEvent, EventBus

logger = logging.getLogger(__name__)


class Wallet(Protocol):
    """Read/debit contract the pack resolver needs from a currency holder."""

    def can_afford(self, cost: int) -> bool:
        ...

    def debit(self, cost: int) -> None:
        ...


@dataclass
class CoinWallet:
    """In-memory coin balance.

    Emits CoinsChangedEvent on every state change via the provided EventBus.
    """

    event_bus: EventBus = field(default_factory=EventBus)
    _amount: int = 0

    def __post_init__(self) -> None:
        if self._amount < 0:
            raise ValueError("Initial coins cannot be negative")

    @property
    def amount(self) -> int:
        return self._amount

    def can_afford(self, cost: int) -> bool:
        if cost < 0:
            return False
        return self._amount >= cost

    def credit(self, amount: int, reason: str = "grant") -> int:
        if amount < 0:
            raise ValueError("Cannot credit negative coins; use debit() for deduction")
        old = self._amount
        new = old + amount
        self._amount = new
        delta = new - old
        logger.debug("Coins added: +%s (reason=%s); old=%s new=%s", delta, reason, old, new)
        self.event_bus.emit(CoinsChangedEvent(old_amount=old, new_amount=new, delta=delta, reason=reason))
        return delta

    def debit(self, cost: int, reason: str = "pack") -> int:
        if cost < 0:
            raise ValueError("Cannot debit negative coins")
        if cost == 0:
            return 0
        if not self.can_afford(cost):
            raise ValueError(f"Insufficient coins: have {self._amount}, need {cost}")
        old = self._amount
        new = old - cost
        self._amount = new
        logger.debug("Coins spent: -%s (reason=%s); old=%s new=%s", cost, reason, old, new)
        self.event_bus.emit(CoinsChangedEvent(old_amount=old, new_amount=new, delta=new - old, reason=reason))
        return cost
