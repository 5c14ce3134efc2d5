from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Optional

from platformdirs import user_data_dir
from pydantic import ValidationError

from ..errors import PersistenceError
from .fs import atomic_write_json
from .models import SCHEMA_VERSION, SessionSnapshot

log = logging.getLogger(__name__)

APP_NAME = "pitypull"
_PROFILE_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class SaveManager:
    """Store one session snapshot per profile as JSON.

    Files live under the platform user data dir unless ``data_dir`` is given.
    A corrupt or schema-invalid file is logged and treated as missing, so a
    damaged save never blocks a session from starting.
    """

    def __init__(self, data_dir: Optional[Path] = None, profile_id: str = "default") -> None:
        if not _PROFILE_RE.match(profile_id):
            raise ValueError(f"Invalid profile id: {profile_id!r}")
        self.data_dir = Path(data_dir) if data_dir else Path(user_data_dir(appname=APP_NAME))
        self.profile_id = profile_id
        self.save_file = self.data_dir / "profiles" / f"{profile_id}.json"

    def has_snapshot(self) -> bool:
        return self.save_file.exists()

    def save(self, snapshot: SessionSnapshot) -> Path:
        try:
            atomic_write_json(self.save_file, snapshot.model_dump(mode="json"))
        except OSError as e:
            log.exception("Failed to save session snapshot")
            raise PersistenceError(f"Cannot write {self.save_file}: {e}") from e
        log.info("Session snapshot saved to %s", self.save_file)
        return self.save_file

    def load(self) -> Optional[SessionSnapshot]:
        if not self.save_file.exists():
            return None
        try:
            data = json.loads(self.save_file.read_text(encoding="utf-8"))
            snapshot = SessionSnapshot.model_validate(data)
        except (json.JSONDecodeError, ValidationError, UnicodeDecodeError) as e:
            log.warning("Ignoring unreadable snapshot %s: %s", self.save_file, e)
            return None
        if snapshot.schema_version > SCHEMA_VERSION:
            log.warning(
                "Snapshot %s has newer schema %d (supported: %d); loading known fields only",
                self.save_file,
                snapshot.schema_version,
                SCHEMA_VERSION,
            )
        log.debug("Loaded session snapshot from %s", self.save_file)
        return snapshot

    def delete(self) -> None:
        if self.save_file.exists():
            self.save_file.unlink()
            log.info("Session snapshot deleted: %s", self.save_file)
