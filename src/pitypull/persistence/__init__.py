from .manager import SaveManager
from .models import SCHEMA_VERSION, LedgerEntry, SessionSnapshot

__all__ = ["SCHEMA_VERSION", "LedgerEntry", "SaveManager", "SessionSnapshot"]
