from .pity import PityTracker
from .resolver import DropResolver, Resolution
from .table import PROBABILITY_EPSILON, RarityTable, RarityTier

__all__ = [
    "PROBABILITY_EPSILON",
    "DropResolver",
    "PityTracker",
    "RarityTable",
    "RarityTier",
    "Resolution",
]
