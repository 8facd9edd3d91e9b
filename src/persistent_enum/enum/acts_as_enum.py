"""Enum declaration and (re)initialization.

acts_as_enum() turns a SQLModel table class that mixes in EnumMember into a
persisted enumeration:

1. Every required member is materialized (found or created).
2. Every other row in the table is loaded as a legacy (inactive) member.
3. Members unchanged since the previous initialization keep their identity.
4. The resulting EnumState is frozen and bound to the class.
5. ORM writes through the class are refused from then on.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from persistent_enum.core.errors import NotInitializedError, UnsafeInitializationError
from persistent_enum.db.store import open_store
from persistent_enum.enum.builder import MemberBuilder, MemberDeclaration, normalize_required
from persistent_enum.enum.guards import install_write_guards
from persistent_enum.enum.materializer import (
    check_constant_identifiers,
    expose_constants,
    materialize,
)
from persistent_enum.enum.member import EnumMember
from persistent_enum.enum.state import EnumState, bind_state, state_of

if TYPE_CHECKING:
    from persistent_enum.db.database import Database
    from persistent_enum.enum.registry import EnumRegistry

logger = structlog.get_logger()


def acts_as_enum(
    model: type[Any],
    required: MemberDeclaration | MemberBuilder | None = (),
    *,
    db: Database,
    registry: EnumRegistry | None = None,
    name_attr: str = "name",
    sql_enum_type: str | None = None,
    builder: MemberBuilder | None = None,
) -> EnumState:
    """Declare ``model`` as an enum whose active members are ``required``.

    Calling it again on the same model reinitializes it with the new
    declaration.

    Args:
        model: SQLModel table class mixing in EnumMember
        required: Names, name -> attributes mapping, or MemberBuilder
        db: Database holding the model's table
        registry: Registry to record the model in (idempotent)
        name_attr: Column holding the member name
        sql_enum_type: Qualified name of a database enum type used as the
            primary key type; new rows use their name as ordinal
        builder: Extra members, appended after ``required``

    Raises:
        UnsafeInitializationError: Called inside ``db.transaction()``
        MissingAttributesError: A new row lacks a required column value
        ConfigError: Two declared names share a constant identifier
    """
    if not (isinstance(model, type) and issubclass(model, EnumMember)):
        raise TypeError(f"{model!r} must mix in EnumMember to be declared as an enum")
    if db.in_transaction():
        raise UnsafeInitializationError.in_transaction(model.__name__)

    previous = state_of(model)
    declared = normalize_required(required, builder)
    check_constant_identifiers(declared)

    with open_store(db, model) as store:
        table_exists = store.table_exists()
        members = materialize(
            store,
            declared,
            name_attr=name_attr,
            sql_enum_type=sql_enum_type,
            table_exists=table_exists,
        )
        # Required members are present; load the rest of the table
        if table_exists:
            known = [getattr(member, store.ordinal_attr) for member in members]
            members.extend(store.find_excluding(known))

    state = EnumState.build(
        model,
        required=declared,
        name_attr=name_attr,
        sql_enum_type=sql_enum_type,
        database=db,
        members=members,
        previous=previous,
    )
    expose_constants(
        model,
        state.required_values,
        name_attr=name_attr,
        retired=previous.constants if previous is not None else (),
    )
    bind_state(model, state)
    install_write_guards(model)

    if registry is not None:
        registry.register(model)

    logger.info(
        "enum_initialized",
        model=model.__name__,
        required=len(state.required_by_ordinal),
        total=len(state.by_ordinal),
        persisted=table_exists,
        reinitialized=previous is not None,
    )
    return state


def reinitialize_acts_as_enum(model: type[Any]) -> EnumState:
    """Rebuild ``model``'s state from its current declaration and table contents."""
    current = state_of(model)
    if current is None:
        raise NotInitializedError.for_model(getattr(model, "__name__", repr(model)))
    return acts_as_enum(
        model,
        current.required_members,
        db=current.database,
        name_attr=current.name_attr,
        sql_enum_type=current.sql_enum_type,
    )


def discard_enum(model: type[Any]) -> None:
    """Unbind ``model``'s state and remove its constants.

    The model behaves as if it had never been declared: lookups raise
    NotInitializedError and ORM writes are accepted again.
    """
    current = state_of(model)
    if current is None:
        return
    for identifier in current.constants:
        if identifier in model.__dict__:
            delattr(model, identifier)
    bind_state(model, None)
    logger.debug("enum_discarded", model=model.__name__)
