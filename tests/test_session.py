import pytest

from pitypull.config.loader import CONFIG_ENV_VAR, load_engine_config
from pitypull.core.rng import RNG
from pitypull.economy.events import PackOpenedEvent
from pitypull.errors import UnknownPackError
from pitypull.packs.ledger import PullLedger
from pitypull.packs.models import INSUFFICIENT_FUNDS, Declined, PackRequest
from pitypull.persistence.models import LedgerEntry, SessionSnapshot
from pitypull.session import PullSession


@pytest.fixture
def config(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    return load_engine_config()


def test_new_session_starts_from_config(config):
    session = PullSession.from_config(config, rng=RNG(seed=1))
    assert session.coins == 5000
    assert session.get_ledger() == []
    statuses = session.get_pity_status()
    assert [s.tier_id for s in statuses] == config.table.ids()
    assert all(s.pulls_since_last == 0 and s.percentage == 0 for s in statuses)


def test_open_mega_pack(config):
    session = PullSession.from_config(config, rng=RNG(seed=7))
    opened = []
    session.event_bus.subscribe(PackOpenedEvent, opened.append)

    results = session.open_pack("mega")

    assert not isinstance(results, Declined)
    assert len(results) == 10
    assert config.table.rank(results[-1].tier.id) >= config.table.rank("epic")
    assert session.coins == 5000 - 900
    assert session.get_ledger() == results
    assert len(opened) == 1 and opened[0].pack_id == "mega"
    for r in results:
        assert session.catalog.owned_quantity(r.item.item_id) >= 1


def test_decline_when_short_of_coins(config):
    session = PullSession.from_config(config, rng=RNG(seed=3))
    session.wallet.debit(4950)
    outcome = session.open_pack("basic")
    assert isinstance(outcome, Declined)
    assert outcome.reason == INSUFFICIENT_FUNDS
    assert outcome.balance == 50
    assert session.coins == 50
    assert session.get_ledger() == []
    assert all(s.pulls_since_last == 0 for s in session.get_pity_status())

    session.add_coins(50)
    assert not isinstance(session.open_pack("basic"), Declined)
    assert session.coins == 0


def test_unknown_pack_id(config):
    session = PullSession.from_config(config, rng=RNG(seed=3))
    with pytest.raises(UnknownPackError):
        session.open_pack("nope")


def test_adhoc_request(config):
    session = PullSession.from_config(config, rng=RNG(seed=3))
    results = session.open_pack(PackRequest(pull_count=3, cost=0, guaranteed_minimum="legendary"))
    assert len(results) == 3
    assert results[-1].tier.id in ("legendary", "mythic")
    assert session.coins == 5000


def test_pity_percentage_and_stats(config):
    session = PullSession.from_config(
        config,
        rng=RNG(seed=5),
        snapshot=SessionSnapshot(pity={"legendary": 25, "mythic": 250}),
    )
    by_tier = {s.tier_id: s for s in session.get_pity_status()}
    assert by_tier["legendary"].percentage == 50
    assert by_tier["mythic"].percentage == 100

    stats = {row["tier_id"]: row for row in session.get_rarity_stats()}
    assert stats["common"]["base_rate"] == pytest.approx(50.0)
    assert stats["legendary"]["pity_progress"] == 25
    assert stats["legendary"]["pity_threshold"] == 50
    assert all(row["pulls"] == 0 for row in stats.values())

    results = session.open_pack("basic")
    stats = {row["tier_id"]: row for row in session.get_rarity_stats()}
    assert stats[results[0].tier.id]["pulls"] == 1


def test_snapshot_restores_state_and_drops_unknown_ids(config):
    session = PullSession.from_config(config, rng=RNG(seed=11))
    session.open_pack("mega")
    snap = session.snapshot()

    restored = PullSession.from_config(config, rng=RNG(seed=11), snapshot=snap)
    assert restored.tracker.snapshot() == session.tracker.snapshot()
    assert [r.to_dict() for r in restored.get_ledger()] == [r.to_dict() for r in session.get_ledger()]
    assert restored.catalog.owned() == session.catalog.owned()

    dirty = SessionSnapshot(
        pity={"rare": 4, "retired": 9},
        ledger=[
            LedgerEntry(item_id="first_lesson", tier_id="common"),
            LedgerEntry(item_id="gone", tier_id="common"),
            LedgerEntry(item_id="first_lesson", tier_id="retired"),
        ],
        owned={"first_lesson": 1, "gone": 3},
    )
    cleaned = PullSession.from_config(config, snapshot=dirty)
    assert cleaned.tracker.snapshot()["rare"] == 4
    assert "retired" not in cleaned.tracker.snapshot()
    assert [r.item.item_id for r in cleaned.get_ledger()] == ["first_lesson"]
    assert cleaned.catalog.owned() == {"first_lesson": 1}


def test_restored_item_is_not_new(config):
    owned = {item.item_id: 1 for item in config.items}
    session = PullSession.from_config(config, rng=RNG(seed=2), snapshot=SessionSnapshot(owned=owned))
    results = session.open_pack("basic")
    assert results[0].is_new is False


def test_same_seed_same_outcome(config):
    a = PullSession.from_config(config, rng=RNG(seed=99))
    b = PullSession.from_config(config, rng=RNG(seed=99))
    for pack in ("basic", "premium", "mega", "ultra"):
        ra = a.open_pack(pack)
        rb = b.open_pack(pack)
        assert [r.to_dict() for r in ra] == [r.to_dict() for r in rb]


def _pulls(results):
    return [(r.tier.id, r.item.item_id, r.is_pity, r.is_new) for r in results]


def test_losing_ledger_history_does_not_change_later_pulls(config):
    kept = PullSession.from_config(config, rng=RNG(seed=21))
    cleared = PullSession.from_config(config, rng=RNG(seed=21))
    tiny = PullSession(config, rng=RNG(seed=21), ledger=PullLedger(capacity=1))

    for pack in ("mega", "premium"):
        kept.open_pack(pack)
        cleared.open_pack(pack)
        tiny.open_pack(pack)

    cleared.ledger.clear()
    assert len(cleared.get_ledger()) == 0
    assert len(tiny.get_ledger()) == 1

    for pack in ("ultra", "basic", "mega"):
        expected = _pulls(kept.open_pack(pack))
        assert _pulls(cleared.open_pack(pack)) == expected
        assert _pulls(tiny.open_pack(pack)) == expected
        assert cleared.tracker.snapshot() == kept.tracker.snapshot()
        assert tiny.tracker.snapshot() == kept.tracker.snapshot()
