"""Tests for config/models.py module."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from persistent_enum.config.models import (
    DatabaseConfig,
    EnumDefaultsConfig,
    LoggingConfig,
    LogOutputConfig,
    PersistentEnumConfig,
)


class TestLogOutputConfig:
    """Tests for LogOutputConfig model."""

    def test_defaults(self) -> None:
        """Default values."""
        config = LogOutputConfig()
        assert config.format == "console"
        assert config.destination == "stderr"
        assert config.level is None

    def test_relative_file_destination_rejected(self) -> None:
        """File destinations must be absolute."""
        with pytest.raises(ValidationError):
            LogOutputConfig(destination="logs/enum.log")

    def test_absolute_file_destination_accepted(self, tmp_path) -> None:
        """Absolute file destinations are kept."""
        path = str(tmp_path / "enum.log")
        assert LogOutputConfig(destination=path).destination == path


class TestLoggingConfig:
    def test_invalid_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")  # type: ignore[arg-type]


class TestDatabaseConfig:
    """Tests for DatabaseConfig model."""

    def test_url_requires_scheme(self) -> None:
        """URLs without a driver scheme are rejected."""
        with pytest.raises(ValidationError):
            DatabaseConfig(url="enums.db")

    def test_postgres_url_accepted(self) -> None:
        config = DatabaseConfig(url="postgresql+psycopg://localhost/app")
        assert config.url.startswith("postgresql")


class TestEnumDefaultsConfig:
    def test_name_attr_must_be_identifier(self) -> None:
        with pytest.raises(ValidationError):
            EnumDefaultsConfig(name_attr="member name")


class TestPersistentEnumConfig:
    def test_sections_default_independently(self) -> None:
        """Each section gets its own default instance."""
        first = PersistentEnumConfig()
        second = PersistentEnumConfig()
        first.logging.level = "DEBUG"
        assert second.logging.level == "INFO"
