"""Config module exports."""

from persistent_enum.config.loader import CONFIG_PATH_ENV, load_config
from persistent_enum.config.models import (
    DatabaseConfig,
    EnumDefaultsConfig,
    LoggingConfig,
    LogOutputConfig,
    PersistentEnumConfig,
)

__all__ = [
    "load_config",
    "PersistentEnumConfig",
    "CONFIG_PATH_ENV",
    "DatabaseConfig",
    "EnumDefaultsConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
