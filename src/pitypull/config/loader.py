from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from jsonschema import Draft202012Validator

from ..errors import ConfigError, UnknownPackError
from ..items.catalog import InMemoryCatalog
from ..items.models import Item
from ..packs.ledger import DEFAULT_LEDGER_CAPACITY
from ..packs.models import PackDefinition
from ..rarity.table import RarityTable, RarityTier

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PITYPULL_CONFIG"
_PKG = "pitypull.config"
DEFAULT_CONFIG_NAME = "default_engine.yaml"
SCHEMA_NAME = "schemas/engine.schema.json"


@dataclass(frozen=True)
class EngineConfig:
    """Everything needed to start a pull session.

    The rarity table is validated against the item list, and every pack's
    guaranteed minimum refers to a known tier.
    """

    table: RarityTable
    packs: Dict[str, PackDefinition]
    items: Tuple[Item, ...]
    starting_coins: int = 0
    ledger_capacity: int = DEFAULT_LEDGER_CAPACITY
    source: Optional[Path] = field(default=None, compare=False)

    def pack(self, pack_id: str) -> PackDefinition:
        try:
            return self.packs[pack_id]
        except KeyError:
            raise UnknownPackError(pack_id) from None

    def build_catalog(self, owned: Optional[Dict[str, int]] = None) -> InMemoryCatalog:
        return InMemoryCatalog(self.items, owned=owned)


@lru_cache(maxsize=1)
def _load_schema() -> Dict[str, Any]:
    with resources.files(_PKG).joinpath(SCHEMA_NAME).open("r", encoding="utf-8") as f:
        logger.debug("Loading engine schema from package resources")
        return json.load(f)


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config root in {path} must be a mapping")
    return data


def _load_defaults() -> Dict[str, Any]:
    with resources.files(_PKG).joinpath(DEFAULT_CONFIG_NAME).open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for k, v in (overlay or {}).items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            merged[k] = _deep_merge(base[k], v)
        else:
            merged[k] = v
    return merged


def schema_errors(data: Any) -> List[str]:
    """Human readable schema violations for a raw config document."""
    validator = Draft202012Validator(_load_schema())
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    out = []
    for err in errors:
        path = "/".join(str(p) for p in err.path) or "<root>"
        out.append(f"at {path}: {err.message}")
    return out


def build_engine_config(data: Dict[str, Any], source: Optional[Path] = None) -> EngineConfig:
    """Validate a raw config mapping and turn it into an EngineConfig."""
    problems = schema_errors(data)
    if problems:
        for p in problems:
            logger.error("Engine config schema violation %s", p)
        raise ConfigError("Engine config failed schema validation:\n - " + "\n - ".join(problems))

    tiers = [
        RarityTier(
            id=str(raw["id"]),
            base_probability=float(raw["base_probability"]),
            pity_threshold=int(raw["pity_threshold"]),
            display_name=str(raw.get("name", "")),
        )
        for raw in data["tiers"]
    ]

    items: List[Item] = []
    tier_ids = {t.id for t in tiers}
    for raw in data["items"]:
        tier_id = str(raw["tier"])
        if tier_id not in tier_ids:
            raise ConfigError(f"Item {raw['id']!r} refers to unknown tier {tier_id!r}")
        items.append(
            Item(
                item_id=str(raw["id"]),
                name=str(raw.get("name", raw["id"])),
                tier_id=tier_id,
                emoji=str(raw.get("emoji", "")),
                category=str(raw.get("category", "general")),
            )
        )

    try:
        catalog = InMemoryCatalog(items)
    except ValueError as e:
        raise ConfigError(str(e)) from e
    table = RarityTable(tiers, catalog=catalog)

    packs: Dict[str, PackDefinition] = {}
    for raw in data["packs"]:
        pack_id = str(raw["id"])
        if pack_id in packs:
            raise ConfigError(f"Duplicate pack id: {pack_id!r}")
        floor = raw.get("guaranteed_minimum")
        if floor is not None and floor not in table:
            raise ConfigError(f"Pack {pack_id!r} guarantees unknown tier {floor!r}")
        packs[pack_id] = PackDefinition(
            id=pack_id,
            name=str(raw.get("name", pack_id)),
            cost=int(raw["cost"]),
            pull_count=int(raw.get("pull_count", 1)),
            guaranteed_minimum=floor,
            description=str(raw.get("description", "")),
            icon=str(raw.get("icon", "")),
        )

    return EngineConfig(
        table=table,
        packs=packs,
        items=tuple(items),
        starting_coins=int(data.get("starting_coins", 0)),
        ledger_capacity=int(data.get("ledger_capacity", DEFAULT_LEDGER_CAPACITY)),
        source=source,
    )


def load_engine_config(path: Optional[Path] = None, *, use_env: bool = True) -> EngineConfig:
    """Load the bundled defaults, overlay an optional user file and validate.

    The user file is ``path`` if given, else the file named by PITYPULL_CONFIG.
    Lists (tiers, packs, items) in the user file replace the defaults wholesale.
    """
    default_data = _load_defaults()

    if path is None and use_env and os.getenv(CONFIG_ENV_VAR):
        path = Path(os.environ[CONFIG_ENV_VAR])

    user_data: Dict[str, Any] = {}
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        user_data = _load_yaml(path)
        logger.info("Loaded user engine config from %s", path)

    merged = _deep_merge(default_data, user_data)
    config = build_engine_config(merged, source=path)
    logger.debug(
        "Engine config ready: %d tiers, %d packs, %d items",
        len(config.table),
        len(config.packs),
        len(config.items),
    )
    return config


def validate_config_file(path: Path) -> List[str]:
    """Return the problems found in a standalone config file (empty when valid)."""
    try:
        data = _load_yaml(Path(path))
        build_engine_config(_deep_merge(_load_defaults(), data), source=Path(path))
    except ConfigError as e:
        return [str(e)]
    except OSError as e:
        return [f"Cannot read {path}: {e}"]
    return []
