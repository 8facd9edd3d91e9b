"""Load PersistentEnumConfig from YAML, environment and keyword overrides.

Precedence, highest first: keyword overrides, ``PERSISTENT_ENUM__SECTION__KEY``
environment variables, the YAML file, model defaults. Without an explicit
path the file named by ``PERSISTENT_ENUM_CONFIG`` is used, if set.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from persistent_enum.config.models import (
    DatabaseConfig,
    EnumDefaultsConfig,
    LoggingConfig,
    PersistentEnumConfig,
)
from persistent_enum.core.errors import ConfigError

CONFIG_PATH_ENV = "PERSISTENT_ENUM_CONFIG"


def _load_yaml(path: Path) -> dict[str, Any]:
    """Parsed YAML mapping; empty for a missing or empty file."""
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


class _YamlSource(PydanticBaseSettingsSource):
    """Lowest-priority source holding the already parsed YAML mapping."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:  # noqa: ARG002
        value = self._data.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return self._data


def _settings_class(data: dict[str, Any]) -> type[BaseSettings]:
    # One class per load: the YAML mapping is bound in the closure, not shared
    class _Settings(BaseSettings):
        model_config = SettingsConfigDict(
            env_prefix="PERSISTENT_ENUM__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        database: DatabaseConfig = DatabaseConfig()
        enums: EnumDefaultsConfig = EnumDefaultsConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            return (init_settings, env_settings, _YamlSource(settings_cls, data))

    return _Settings


def _config_path(path: Path | str | None) -> Path | None:
    if path is not None:
        return Path(path)
    from_env = os.environ.get(CONFIG_PATH_ENV)
    return Path(from_env) if from_env else None


def load_config(path: Path | str | None = None, **overrides: Any) -> PersistentEnumConfig:
    """Build the effective configuration.

    Args:
        path: YAML file; defaults to $PERSISTENT_ENUM_CONFIG. A missing file
            counts as empty.
        **overrides: Section values (``logging=``, ``database=``, ``enums=``)

    Raises:
        ConfigError: Unparseable YAML or a value that fails validation.
    """
    config_path = _config_path(path)
    data = _load_yaml(config_path) if config_path is not None else {}

    try:
        settings = _settings_class(data)(**overrides)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ConfigError.invalid_value(field, first.get("input"), first["msg"]) from e
    return PersistentEnumConfig.model_validate(settings.model_dump())
