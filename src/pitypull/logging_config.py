import logging
import os

LOG_LEVEL_ENV_VAR = "PITYPULL_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def resolve_level(default_level: int) -> int:
    """Level named by PITYPULL_LOG_LEVEL, or ``default_level`` when unset or unknown."""
    name = os.getenv(LOG_LEVEL_ENV_VAR, "").strip().upper()
    level = logging.getLevelName(name) if name else default_level
    return level if isinstance(level, int) else default_level


def configure_logging(default_level: int = logging.WARNING) -> int:
    """Attach a root handler and set the level of the ``pitypull`` loggers only.

    Third-party loggers keep the root level so a debug run shows pull
    resolution without schema or filesystem chatter.
    """
    level = resolve_level(default_level)
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("pitypull").setLevel(level)
    return level
