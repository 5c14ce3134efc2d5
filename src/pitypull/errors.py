class PityPullError(Exception):
    """Base error for pitypull domain exceptions."""


class ConfigError(PityPullError):
    """Raised at construction time when tier, pack or catalog configuration is invalid.

    The engine is unusable until the configuration is fixed.
    """


class UnknownTierError(PityPullError, KeyError):
    """Raised when a rarity tier id is not part of the active rarity table."""


class UnknownPackError(PityPullError, KeyError):
    """Raised when a pack id is not among the configured packs."""


class PersistenceError(PityPullError):
    """Raised when session state cannot be written to disk."""
