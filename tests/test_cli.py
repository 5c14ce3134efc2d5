import json

from pitypull.cli import main
from pitypull.config.loader import CONFIG_ENV_VAR


def test_rates_lists_tiers_and_packs(capsys, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert main(["rates"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert [t["id"] for t in data["tiers"]][0] == "common"
    assert {p["id"] for p in data["packs"]} == {"basic", "premium", "mega", "ultra"}


def test_simulate_is_reproducible(capsys, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert main(["simulate", "--pack", "mega", "--opens", "3", "--seed", "1"]) == 0
    first = json.loads(capsys.readouterr().out)
    assert main(["simulate", "--pack", "mega", "--opens", "3", "--seed", "1"]) == 0
    second = json.loads(capsys.readouterr().out)

    assert first == second
    assert first["opened"] == 3
    assert first["declined"] == 0
    assert first["coins_left"] == 5000 - 3 * 900
    assert sum(first["tiers"].values()) == 30


def test_simulate_declines_when_out_of_coins(capsys, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert main(["simulate", "--pack", "ultra", "--opens", "2", "--coins", "2500", "--seed", "4"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["opened"] == 1
    assert data["declined"] == 1
    assert data["coins_left"] == 0


def test_simulate_unknown_pack(capsys, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert main(["simulate", "--pack", "nope"]) == 2
    assert "Unknown pack" in capsys.readouterr().err


def test_validate(tmp_path, capsys):
    good = tmp_path / "good.yaml"
    good.write_text("starting_coins: 1\n", encoding="utf-8")
    bad = tmp_path / "bad.yaml"
    bad.write_text("starting_coins: -1\n", encoding="utf-8")

    assert main(["validate", str(good)]) == 0
    assert "OK" in capsys.readouterr().out
    assert main(["validate", str(bad)]) == 1
    assert "INVALID" in capsys.readouterr().out


def test_bad_config_exits_with_error(tmp_path, capsys):
    bad = tmp_path / "bad.yaml"
    bad.write_text("tiers: []\n", encoding="utf-8")
    assert main(["rates", "--config", str(bad)]) == 1
    assert "Config error" in capsys.readouterr().err
