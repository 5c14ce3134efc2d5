from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, TypeVar

T = TypeVar("T")


class EventBus:
    """Simple thread-safe in-process event bus.

    Subscribers are keyed by event class; events are emitted by instance.
    Delivery is synchronous so pack openings stay deterministic.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._subscribers: Dict[Type[Any], List[Callable[[Any], None]]] = {}

    def subscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        with self._lock:
            self._subscribers.setdefault(event_type, []).append(handler)  # type: ignore[arg-type]

    def unsubscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        with self._lock:
            handlers = self._subscribers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)
                if not handlers:
                    self._subscribers.pop(event_type, None)

    def emit(self, event: Any) -> None:
        with self._lock:
            for event_type, handlers in list(self._subscribers.items()):
                if isinstance(event, event_type):
                    for h in list(handlers):
                        h(event)


@dataclass(frozen=True)
class CoinsChangedEvent:
    old_amount: int
    new_amount: int
    delta: int
    reason: str  # e.g., "pack", "grant", "adjust"


@dataclass(frozen=True)
class PackOpenedEvent:
    pack_id: Optional[str]
    cost: int
    tiers: Tuple[str, ...]
    pity_hits: int


@dataclass(frozen=True)
class PackDeclinedEvent:
    pack_id: Optional[str]
    cost: int
    reason: str
    balance: Optional[int]
