"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- load_config() precedence: defaults < YAML < env vars < kwargs
- validation errors surfaced as ConfigError
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from persistent_enum.config.loader import CONFIG_PATH_ENV, _load_yaml, load_config
from persistent_enum.config.models import LoggingConfig
from persistent_enum.core.errors import ConfigError, ErrorCode


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        """Returns empty dict when file doesn't exist."""
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        """Loads valid YAML content."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("database:\n  url: sqlite:///app.db\n")

        assert _load_yaml(yaml_file) == {"database": {"url": "sqlite:///app.db"}}

    def test_returns_empty_for_yaml_null(self, tmp_path: Path) -> None:
        """Returns empty dict for YAML containing null."""
        yaml_file = tmp_path / "null.yaml"
        yaml_file.write_text("null\n")

        assert _load_yaml(yaml_file) == {}

    def test_rejects_non_mapping_document(self, tmp_path: Path) -> None:
        """A YAML list at the top level is a parse error."""
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- one\n- two\n")

        with pytest.raises(ConfigError, match="mapping"):
            _load_yaml(yaml_file)

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        """Raises ConfigError for invalid YAML syntax."""
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("logging:\n  level:\n    - invalid: [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR


class TestLoadConfig:
    """Tests for load_config function."""

    def test_returns_defaults_without_file(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Built-in defaults apply when no file is given."""
        monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
        config = load_config()
        assert config.logging.level == "INFO"
        assert config.database.url == "sqlite:///enums.db"
        assert config.database.echo is False
        assert config.enums.name_attr == "name"

    def test_loads_yaml_file(self, tmp_path: Path) -> None:
        """Values come from the YAML file."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(
            "logging:\n  level: DEBUG\n"
            "database:\n  url: sqlite:///other.db\n"
            "enums:\n  name_attr: label\n"
        )

        config = load_config(yaml_file)
        assert config.logging.level == "DEBUG"
        assert config.database.url == "sqlite:///other.db"
        assert config.enums.name_attr == "label"

    def test_env_vars_override_yaml(self, tmp_path: Path) -> None:
        """Environment variables override YAML config."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("logging:\n  level: INFO\n")

        with patch.dict(os.environ, {"PERSISTENT_ENUM__LOGGING__LEVEL": "WARNING"}):
            config = load_config(yaml_file)
        assert config.logging.level == "WARNING"

    def test_kwargs_override_all(self, tmp_path: Path) -> None:
        """Keyword arguments override everything."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("logging:\n  level: DEBUG\n")

        config = load_config(yaml_file, logging=LoggingConfig(level="ERROR"))
        assert config.logging.level == "ERROR"

    def test_raises_config_error_for_invalid_value(self, tmp_path: Path) -> None:
        """Raises ConfigError for invalid config values."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("database:\n  url: not-a-url\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "database" in exc_info.value.details["field"]

    def test_path_from_environment(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """PERSISTENT_ENUM_CONFIG names the file when no path is passed."""
        yaml_file = tmp_path / "from-env.yaml"
        yaml_file.write_text("enums:\n  name_attr: code\n")
        monkeypatch.setenv(CONFIG_PATH_ENV, str(yaml_file))

        assert load_config().enums.name_attr == "code"

    def test_explicit_path_beats_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        env_file = tmp_path / "env.yaml"
        env_file.write_text("enums:\n  name_attr: code\n")
        explicit = tmp_path / "explicit.yaml"
        explicit.write_text("enums:\n  name_attr: label\n")
        monkeypatch.setenv(CONFIG_PATH_ENV, str(env_file))

        assert load_config(explicit).enums.name_attr == "label"

    def test_missing_file_counts_as_empty(self, tmp_path: Path) -> None:
        assert load_config(tmp_path / "absent.yaml").database.url == "sqlite:///enums.db"
