from .loader import (
    CONFIG_ENV_VAR,
    EngineConfig,
    build_engine_config,
    load_engine_config,
    schema_errors,
    validate_config_file,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "EngineConfig",
    "build_engine_config",
    "load_engine_config",
    "schema_errors",
    "validate_config_file",
]
