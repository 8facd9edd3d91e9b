"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (PERSISTENT_ENUM__SECTION__KEY)
3. YAML config file passed to load_config()
4. Built-in defaults (this file)

Environment Variable Format:
    PERSISTENT_ENUM__<SECTION>__<KEY>=<VALUE>

Examples:
    PERSISTENT_ENUM__LOGGING__LEVEL=DEBUG
    PERSISTENT_ENUM__DATABASE__URL=postgresql+psycopg://localhost/app
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        PERSISTENT_ENUM__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every materialized member.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class DatabaseConfig(BaseModel):
    """Row store connection.

    Env vars:
        PERSISTENT_ENUM__DATABASE__URL: SQLAlchemy database URL
        PERSISTENT_ENUM__DATABASE__ECHO: Log every SQL statement
    """

    url: str = Field(
        default="sqlite:///enums.db",
        description="SQLAlchemy URL of the database holding the enum tables.",
    )
    echo: bool = Field(
        default=False,
        description="Echo SQL statements through the sqlalchemy.engine logger.",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if "://" not in v:
            raise ValueError(f"Database URL must include a driver scheme: {v}")
        return v


class EnumDefaultsConfig(BaseModel):
    """Declaration defaults applied when acts_as_enum() omits them.

    Env vars:
        PERSISTENT_ENUM__ENUMS__NAME_ATTR: Default member name column
    """

    name_attr: str = Field(
        default="name",
        description="Column holding the member name.",
    )

    @field_validator("name_attr")
    @classmethod
    def validate_name_attr(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"name_attr must be an attribute name: {v!r}")
        return v


class PersistentEnumConfig(BaseModel):
    """Root configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    enums: EnumDefaultsConfig = Field(default_factory=EnumDefaultsConfig)
