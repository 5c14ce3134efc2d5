from .events import CoinsChangedEvent, EventBus, PackDeclinedEvent, PackOpenedEvent
from .wallet import CoinWallet, Wallet

__all__ = [
    "CoinWallet",
    "CoinsChangedEvent",
    "EventBus",
    "PackDeclinedEvent",
    "PackOpenedEvent",
    "Wallet",
]
