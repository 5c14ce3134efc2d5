from .ledger import DEFAULT_LEDGER_CAPACITY, PullLedger
from .models import INSUFFICIENT_FUNDS, Declined, PackDefinition, PackRequest, PullResult
from .resolver import PackResolver

__all__ = [
    "DEFAULT_LEDGER_CAPACITY",
    "INSUFFICIENT_FUNDS",
    "Declined",
    "PackDefinition",
    "PackRequest",
    "PackResolver",
    "PullLedger",
    "PullResult",
]
