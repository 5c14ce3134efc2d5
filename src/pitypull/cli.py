from __future__ import annotations

import argparse
import json
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import Optional

from .config.loader import load_engine_config, validate_config_file
from .core.rng import RNG
from .economy.events import EventBus
from .economy.wallet import CoinWallet
from .errors import ConfigError, UnknownPackError
from .logging_config import configure_logging
from .packs.models import Declined
from .session import PullSession

logger = logging.getLogger(__name__)


def _config_path(args: argparse.Namespace) -> Optional[Path]:
    return Path(args.config) if args.config else None


def _cmd_rates(args: argparse.Namespace) -> int:
    config = load_engine_config(_config_path(args))
    data = {
        "tiers": [
            {
                "id": t.id,
                "name": t.name,
                "base_probability": t.base_probability,
                "pity_threshold": t.pity_threshold,
            }
            for t in config.table
        ],
        "packs": [
            {
                "id": p.id,
                "name": p.name,
                "cost": p.cost,
                "pull_count": p.pull_count,
                "guaranteed_minimum": p.guaranteed_minimum,
            }
            for p in config.packs.values()
        ],
    }
    print(json.dumps(data, indent=2, ensure_ascii=False))
    return 0


def _cmd_simulate(args: argparse.Namespace) -> int:
    config = load_engine_config(_config_path(args))
    try:
        config.pack(args.pack)
    except UnknownPackError:
        print(f"Unknown pack: {args.pack}", file=sys.stderr)
        return 2

    logger.debug("Simulating %d opens of pack %s (seed=%s)", args.opens, args.pack, args.seed)
    bus = EventBus()
    coins = config.starting_coins if args.coins is None else args.coins
    session = PullSession(config, rng=RNG(seed=args.seed), wallet=CoinWallet(event_bus=bus, _amount=coins), event_bus=bus)

    tiers: Counter = Counter()
    pity_hits = 0
    declined = 0
    opened = 0
    for _ in range(args.opens):
        outcome = session.open_pack(args.pack)
        if isinstance(outcome, Declined):
            declined += 1
            continue
        opened += 1
        for result in outcome:
            tiers[result.tier.id] += 1
            pity_hits += int(result.is_pity)

    summary = {
        "pack": args.pack,
        "seed": args.seed,
        "opened": opened,
        "declined": declined,
        "coins_left": session.coins,
        "tiers": {t.id: tiers.get(t.id, 0) for t in config.table},
        "pity_hits": pity_hits,
        "pity_status": [s.to_dict() for s in session.get_pity_status()],
    }
    print(json.dumps(summary, indent=2, sort_keys=True))
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    problems = validate_config_file(Path(args.path))
    if problems:
        print(f"INVALID: {args.path}")
        for p in problems:
            print(p)
        return 1
    print(f"OK: {args.path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pitypull", description="Sticker pack drop engine tools")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    r = sub.add_parser("rates", help="Show rarity tiers and packs")
    r.add_argument("--config", help="Path to an engine config YAML file", default=None)
    r.set_defaults(func=_cmd_rates)

    s = sub.add_parser("simulate", help="Open packs in a fresh session and summarise the drops")
    s.add_argument("--pack", required=True, help="Pack id to open")
    s.add_argument("--opens", type=int, default=10, help="How many packs to open")
    s.add_argument("--seed", type=int, default=None, help="RNG seed for a reproducible run")
    s.add_argument("--coins", type=int, default=None, help="Starting coins (defaults to config)")
    s.add_argument("--config", help="Path to an engine config YAML file", default=None)
    s.set_defaults(func=_cmd_simulate)

    v = sub.add_parser("validate", help="Validate an engine config YAML file")
    v.add_argument("path", help="Path to the config file")
    v.set_defaults(func=_cmd_validate)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.debug else logging.WARNING)
    try:
        return args.func(args)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
