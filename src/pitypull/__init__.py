"""
pitypull core package.

Headless reward-distribution engine for sticker packs:
- Rarity tiers with weighted drop rates and escalating pity thresholds
- Per-session pity tracking and a bounded pull history
- Pack opening with a guaranteed minimum rarity on the final pull
- Coin wallet, YAML configuration and snapshot persistence

UI layers should compose these services through PullSession.
"""
from importlib.metadata import PackageNotFoundError, version

from .errors import (
    ConfigError,
    PersistenceError,
    PityPullError,
    UnknownPackError,
    UnknownTierError,
)
from .items import InMemoryCatalog, Item, ItemSelector
from .packs import Declined, PackDefinition, PackRequest, PackResolver, PullLedger, PullResult
from .rarity import DropResolver, PityTracker, RarityTable, RarityTier, Resolution
from .session import PityStatus, PullSession

try:
    __version__ = version("pitypull")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "ConfigError",
    "Declined",
    "DropResolver",
    "InMemoryCatalog",
    "Item",
    "ItemSelector",
    "PackDefinition",
    "PackRequest",
    "PackResolver",
    "PersistenceError",
    "PityPullError",
    "PityStatus",
    "PityTracker",
    "PullLedger",
    "PullResult",
    "PullSession",
    "RarityTable",
    "RarityTier",
    "Resolution",
    "UnknownPackError",
    "UnknownTierError",
]
