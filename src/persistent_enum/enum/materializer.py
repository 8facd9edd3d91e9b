"""Constant materialization: make sure every required member has a row.

For each required name the materializer finds the existing row by exact
name match, or creates it with the declared attributes. Existing rows are
never updated, so a declaration whose attributes drifted from the table
keeps the stored values.

When the model's table does not exist, members are built as transient
(unsaved) instances with sequential ordinals instead, so code that only
needs the constants keeps working without a schema.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy.orm import QueryableAttribute
from sqlmodel import SQLModel

from persistent_enum.core.errors import ConfigError, MissingAttributesError
from persistent_enum.db.store import ColumnInfo, RowStore, open_store
from persistent_enum.enum.builder import MemberBuilder, MemberDeclaration, normalize_required
from persistent_enum.enum.guards import allow_writes
from persistent_enum.enum.names import constant_identifier

if TYPE_CHECKING:
    from persistent_enum.db.database import Database

logger = structlog.get_logger()


def _row_attributes(
    store: RowStore,
    columns: Mapping[str, ColumnInfo],
    name: str,
    declared: Mapping[str, Any],
    *,
    name_attr: str,
    sql_enum_type: str | None,
) -> dict[str, Any]:
    """Column values for a new row named ``name``.

    Unknown attributes are dropped with a warning; required columns left
    without a value raise MissingAttributesError.
    """
    model_name = store.model.__name__
    attributes: dict[str, Any] = {}
    for key, value in declared.items():
        if key not in columns:
            logger.warning(
                "enum_attribute_missing_from_table",
                model=model_name,
                member=name,
                attribute=key,
                table=store.table.name,
            )
            continue
        attributes[key] = value

    attributes[name_attr] = name
    if sql_enum_type is not None:
        attributes[store.ordinal_attr] = name

    missing = [
        info.key
        for info in columns.values()
        if info.required and info.key not in attributes
    ]
    if missing:
        raise MissingAttributesError.for_member(model_name, name, missing)
    return attributes


def materialize(
    store: RowStore,
    required: Mapping[str, Mapping[str, Any]],
    *,
    name_attr: str,
    sql_enum_type: str | None = None,
    table_exists: bool | None = None,
) -> list[SQLModel]:
    """Return one member per required name, creating rows that are missing.

    Args:
        store: Row store for the enum model
        required: Ordered name -> extra attributes mapping
        name_attr: Column holding the member name
        sql_enum_type: Database enum type of the primary key, if any
        table_exists: Pre-computed table check (queried when None)
    """
    model = store.model
    columns = store.columns()
    if name_attr not in columns:
        raise ConfigError.invalid_value(
            "name_attr", name_attr, f"not a mapped column of {model.__name__}"
        )

    if table_exists is None:
        table_exists = store.table_exists()
    if not table_exists:
        logger.warning(
            "enum_table_missing",
            model=model.__name__,
            table=store.table.name,
            detail=f"Database table for model {model.__name__} doesn't exist, "
            "enum members will not be persisted",
        )

    members: list[SQLModel] = []
    next_ordinal = 1
    for name, declared in required.items():
        if table_exists:
            member = store.find_by(name_attr, name)
            if member is None:
                attributes = _row_attributes(
                    store, columns, name, declared, name_attr=name_attr, sql_enum_type=sql_enum_type
                )
                if sql_enum_type is not None:
                    store.ensure_enum_label(sql_enum_type, name)
                with allow_writes():
                    member = store.create(attributes)
                logger.debug(
                    "enum_member_created",
                    model=model.__name__,
                    member=name,
                    ordinal=getattr(member, store.ordinal_attr),
                )
        else:
            attributes = _row_attributes(
                store, columns, name, declared, name_attr=name_attr, sql_enum_type=sql_enum_type
            )
            if sql_enum_type is None:
                ordinal = attributes.get(store.ordinal_attr)
                if ordinal is None:
                    ordinal = next_ordinal
                    attributes[store.ordinal_attr] = ordinal
                next_ordinal = max(next_ordinal, ordinal + 1)
            member = model(**attributes)
        members.append(member)
    return members


def check_constant_identifiers(names: Iterable[Any]) -> dict[str, str]:
    """Map each name's constant identifier to the name.

    Raises:
        ConfigError: Two names normalize to the same identifier
    """
    seen: dict[str, str] = {}
    for name in names:
        identifier = constant_identifier(name)
        if identifier in seen:
            raise ConfigError.invalid_value(
                "name", name, f"{identifier} is already used by {seen[identifier]!r}"
            )
        seen[identifier] = name
    return seen


def expose_constants(
    model: type,
    members: Iterable[Any],
    *,
    name_attr: str,
    retired: Iterable[str] = (),
) -> tuple[str, ...]:
    """Set each member as a class attribute named by its constant identifier.

    Identifiers in ``retired`` that are no longer exposed are removed.
    """
    members = list(members)
    check_constant_identifiers(getattr(member, name_attr) for member in members)
    exposed: list[str] = []
    for member in members:
        identifier = constant_identifier(getattr(member, name_attr))
        if isinstance(model.__dict__.get(identifier), QueryableAttribute):
            raise ConfigError.invalid_value(
                "name", getattr(member, name_attr), f"{identifier} is a mapped attribute"
            )
        setattr(model, identifier, member)
        exposed.append(identifier)
    for identifier in retired:
        if identifier not in exposed and identifier in model.__dict__:
            delattr(model, identifier)
    return tuple(exposed)


def cache_constants(
    model: type[SQLModel],
    required: MemberDeclaration | MemberBuilder,
    *,
    db: Database,
    name_attr: str = "name",
    sql_enum_type: str | None = None,
) -> list[SQLModel]:
    """Materialize ``required`` and expose each member as a constant on ``model``.

    Unlike acts_as_enum() this builds no lookup state: the members are
    ordinary (unfrozen) rows.
    """
    declared = normalize_required(required)
    check_constant_identifiers(declared)
    with open_store(db, model) as store:
        members = materialize(store, declared, name_attr=name_attr, sql_enum_type=sql_enum_type)
    expose_constants(model, members, name_attr=name_attr)
    return members
