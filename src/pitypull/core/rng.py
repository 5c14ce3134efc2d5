from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Protocol


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0.0, 1.0)."""

    def random(self) -> float:
        ...


@dataclass
class RNG:
    """
    Seedable source of draws for the drop and item resolvers.

    Each session owns one instance so pack openings never touch Python's
    global RNG and a fixed seed replays the same pulls.
    """

    seed: Optional[int] = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def random(self) -> float:
        """Return the next draw in the range [0.0, 1.0)."""
        return self._rng.random()
