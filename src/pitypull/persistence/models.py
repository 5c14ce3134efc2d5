from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

SCHEMA_VERSION = 1


class LedgerEntry(BaseModel):
    """One persisted pull, referenced by ids rather than full objects."""

    item_id: str = Field(..., min_length=1)
    tier_id: str = Field(..., min_length=1)
    is_new: bool = False
    is_pity: bool = False


class SessionSnapshot(BaseModel):
    """Persisted per-user engine state.

    ``pity`` is the flat tier id -> pulls-since-last map; ``ledger`` is the
    recent pull history, newest first. Tier or item ids unknown to the current
    configuration are dropped on restore.
    """

    schema_version: int = SCHEMA_VERSION
    pity: Dict[str, int] = Field(default_factory=dict)
    ledger: List[LedgerEntry] = Field(default_factory=list)
    owned: Dict[str, int] = Field(default_factory=dict, description="Owned sticker quantities")

    @field_validator("pity", "owned")
    @classmethod
    def counters_not_negative(cls, v: Dict[str, int]) -> Dict[str, int]:
        for key, value in v.items():
            if value < 0:
                raise ValueError(f"counter for {key!r} cannot be negative")
        return dict(v)
