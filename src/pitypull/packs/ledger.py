from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Iterable, List, Optional

from .models import PullResult

logger = logging.getLogger(__name__)

DEFAULT_LEDGER_CAPACITY = 100


class PullLedger:
    """Bounded history of recent pulls, newest pack first.

    Reporting only: nothing in the resolvers reads it back.
    """

    def __init__(self, capacity: int = DEFAULT_LEDGER_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("Ledger capacity must be positive")
        self.capacity = capacity
        self._entries: Deque[PullResult] = deque(maxlen=capacity)

    def record(self, results: Iterable[PullResult]) -> None:
        """Place a pack's results, in pull order, ahead of everything older."""
        batch = list(results)
        # extendleft reverses its input; feeding it reversed keeps pull order
        self._entries.extendleft(reversed(batch))
        logger.debug("Ledger recorded %d pulls (%d retained)", len(batch), len(self._entries))

    def entries(self, limit: Optional[int] = None) -> List[PullResult]:
        items = list(self._entries)
        if limit is not None:
            items = items[: max(0, limit)]
        return items

    def snapshot(self) -> List[dict]:
        return [r.to_dict() for r in self._entries]

    def restore(self, results: Iterable[PullResult]) -> None:
        """Replace the history with ``results`` given newest first."""
        self._entries.clear()
        self._entries.extend(results)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(list(self._entries))
