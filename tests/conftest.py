import sys
from pathlib import Path
from typing import Iterable, List

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from pitypull.items.catalog import InMemoryCatalog  # noqa: E402
from pitypull.items.models import Item  # noqa: E402
from pitypull.rarity.table import RarityTable, RarityTier  # noqa: E402


class ScriptedRandom:
    """Random source that replays fixed draws, then repeats the last one."""

    def __init__(self, values: Iterable[float]) -> None:
        self.values: List[float] = list(values)
        self.calls = 0

    def random(self) -> float:
        if not self.values:
            raise AssertionError("ScriptedRandom has no values")
        idx = min(self.calls, len(self.values) - 1)
        self.calls += 1
        return self.values[idx]


SIX_TIERS = [
    ("common", 0.50, 2),
    ("uncommon", 0.30, 5),
    ("rare", 0.12, 10),
    ("epic", 0.05, 25),
    ("legendary", 0.02, 50),
    ("mythic", 0.01, 100),
]


def make_tiers(rows=SIX_TIERS) -> List[RarityTier]:
    return [RarityTier(id=tid, base_probability=p, pity_threshold=pity, display_name=tid.title()) for tid, p, pity in rows]


def make_catalog(tier_ids: Iterable[str], per_tier: int = 2) -> InMemoryCatalog:
    items = []
    for tid in tier_ids:
        for n in range(per_tier):
            items.append(Item(item_id=f"{tid}_{n}", name=f"{tid.title()} #{n}", tier_id=tid))
    return InMemoryCatalog(items)


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def six_tier_table() -> RarityTable:
    return RarityTable(make_tiers())


@pytest.fixture
def six_tier_catalog() -> InMemoryCatalog:
    return make_catalog([t[0] for t in SIX_TIERS])
