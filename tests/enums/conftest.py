"""Fixtures for enum tests."""

from collections.abc import Generator
from pathlib import Path

import pytest
import structlog
from enum_models import ALL_MODELS, PERSISTED, REFERENCING

from persistent_enum.db import Database
from persistent_enum.enum import EnumRegistry, discard_enum


@pytest.fixture(autouse=True)
def _default_structlog() -> None:
    """Undo logging configuration left behind by other test modules."""
    structlog.reset_defaults()


@pytest.fixture
def db(tmp_path: Path) -> Generator[Database, None, None]:
    """Fresh SQLite database with every persisted enum table created."""
    database = Database(f"sqlite:///{tmp_path / 'enums.db'}")
    database.create_all(tables=[model.__table__ for model in [*PERSISTED, *REFERENCING]])
    yield database
    for model in ALL_MODELS:
        discard_enum(model)
    database.dispose()


@pytest.fixture
def registry(db: Database) -> EnumRegistry:
    return EnumRegistry(db)
