"""Tests for EnumRegistry."""

from pathlib import Path

import pytest
from enum_models import Color, Counter, Renamed

from persistent_enum.config.models import DatabaseConfig, EnumDefaultsConfig, PersistentEnumConfig
from persistent_enum.core.errors import UnresolvableTypeError
from persistent_enum.db import Database
from persistent_enum.enum import EnumRegistry, acts_as_enum, resolve_type_name, type_name


class TestTypeNames:
    def test_type_name_is_module_qualified(self) -> None:
        assert type_name(Color) == "enum_models:Color"

    def test_resolve_type_name(self) -> None:
        assert resolve_type_name("enum_models:Color") is Color

    def test_resolve_missing_module(self) -> None:
        with pytest.raises(UnresolvableTypeError):
            resolve_type_name("no_such_module_here:Color")


class TestRegistration:
    def test_declare_registers_model(self, registry: EnumRegistry) -> None:
        registry.declare(Color, ["Red"])

        assert Color in registry
        assert registry.names() == ["enum_models:Color"]
        assert Color.RED.name == "Red"

    def test_declare_uses_registry_defaults(self, db: Database) -> None:
        registry = EnumRegistry(db, name_attr="namey")

        registry.declare(Renamed, ["Alpha"])

        assert Renamed.ALPHA.namey == "Alpha"

    def test_declare_without_database_raises(self) -> None:
        with pytest.raises(ValueError, match="needs a database"):
            EnumRegistry().declare(Color, ["Red"])

    def test_acts_as_enum_registers_with_every_registry_passed(
        self, db: Database, registry: EnumRegistry
    ) -> None:
        other = EnumRegistry(db)

        acts_as_enum(Color, ["Red"], db=db, registry=registry)
        acts_as_enum(Color, ["Red", "Green"], db=db, registry=other)

        assert registry.types() == [Color]
        assert other.types() == [Color]

    def test_declare_registers_model_declared_without_registry(
        self, db: Database, registry: EnumRegistry
    ) -> None:
        """A model first declared on its own is still recorded by declare()."""
        # Given
        acts_as_enum(Color, ["Red"], db=db)

        # When
        registry.declare(Color, ["Red", "Green"])

        # Then
        assert Color in registry
        assert len(registry) == 1
        assert set(registry.reinitialize_all()) == {"enum_models:Color"}

    def test_redeclaring_through_registry_keeps_one_entry(self, registry: EnumRegistry) -> None:
        registry.declare(Color, ["Red"])
        registry.declare(Color, ["Red", "Green"])

        assert registry.names() == ["enum_models:Color"]

    def test_discard(self, registry: EnumRegistry) -> None:
        registry.declare(Color, ["Red"])

        registry.discard(Color)

        assert Color not in registry
        assert len(registry) == 0
        assert Color.enum_state() is None

    def test_contains_rejects_non_types(self, registry: EnumRegistry) -> None:
        assert "enum_models:Color" not in registry


class TestBulkOperations:
    def test_reinitialize_all_reloads_every_enum(
        self, db: Database, registry: EnumRegistry
    ) -> None:
        registry.declare(Color, ["Red"])
        registry.declare(Counter, {"One": {"count": 1}})
        db.execute_raw("INSERT INTO colors (id, name) VALUES (90, 'Fixture')")
        db.execute_raw("INSERT INTO counters (id, name, count) VALUES (91, 'Loaded', 5)")

        states = registry.reinitialize_all()

        assert set(states) == {"enum_models:Color", "enum_models:Counter"}
        assert Color.by_ordinal(90).name == "Fixture"
        assert Counter.by_ordinal(91).count == 5
        assert Counter.ONE.active

    def test_reresolve_all_keeps_live_classes(self, registry: EnumRegistry) -> None:
        registry.declare(Color, ["Red"])

        registry.reresolve_all()

        assert Color in registry

    def test_reresolve_all_with_custom_resolver(self, registry: EnumRegistry) -> None:
        registry.declare(Color, ["Red"])

        class Replacement:
            pass

        registry.reresolve_all(lambda name: Replacement)

        assert registry.types() == [Replacement]
        assert registry.names() == ["enum_models:Color"]

    def test_reresolve_all_unresolvable_class(self, registry: EnumRegistry) -> None:
        class Ghost:
            pass

        registry.register(Ghost)

        with pytest.raises(UnresolvableTypeError) as exc_info:
            registry.reresolve_all()
        assert "Ghost" in exc_info.value.details["type_name"]

    def test_reresolve_all_rejects_non_types(self, registry: EnumRegistry) -> None:
        registry.declare(Color, ["Red"])

        with pytest.raises(UnresolvableTypeError):
            registry.reresolve_all(lambda name: object())


class TestLifecycle:
    def test_from_config(self, tmp_path: Path) -> None:
        config = PersistentEnumConfig(
            database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'cfg.db'}"),
            enums=EnumDefaultsConfig(name_attr="label"),
        )

        registry = EnumRegistry.from_config(config)
        try:
            assert registry.db is not None
            assert registry.db.dialect == "sqlite"
            assert registry.name_attr == "label"
        finally:
            registry.close()

    def test_close_without_database(self) -> None:
        EnumRegistry().close()
