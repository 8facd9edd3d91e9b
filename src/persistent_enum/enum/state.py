"""Frozen per-type enum state.

An EnumState is built once per (re)initialization of an enum type and bound
to a single slot on the type. It is never mutated afterwards: the
initializer builds a new one and rebinds the slot.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from sqlalchemy import inspect as sa_inspect

from persistent_enum.db.store import primary_key_attr
from persistent_enum.enum.names import constant_identifier, member_key

if TYPE_CHECKING:
    from persistent_enum.db.database import Database

STATE_ATTR = "__persistent_enum_state__"

_FROZEN_KEY = "persistent_enum.frozen"


def state_of(model: type) -> EnumState | None:
    """The state bound to ``model`` itself (subclasses do not inherit it)."""
    return model.__dict__.get(STATE_ATTR)


def bind_state(model: type, state: EnumState | None) -> None:
    setattr(model, STATE_ATTR, state)


def ordinal_of(member: Any) -> Any:
    return getattr(member, primary_key_attr(type(member)))


def freeze_member(member: Any) -> None:
    sa_inspect(member).info[_FROZEN_KEY] = True


def is_frozen(member: Any) -> bool:
    # Read the instance dict directly: attribute access may run before
    # SQLAlchemy has attached instance state.
    state = member.__dict__.get("_sa_instance_state")
    return state is not None and bool(state.info.get(_FROZEN_KEY))


@dataclass(frozen=True)
class EnumState:
    """Name and ordinal indices over every known member of one enum type.

    ``by_name`` and ``by_ordinal`` hold every row of the table, including
    legacy rows that are no longer declared. ``required_by_ordinal`` holds
    only the declared (active) members. All three are read-only mappings in
    ascending ordinal order.
    """

    model: type
    required_members: Mapping[str, Mapping[str, Any]]
    name_attr: str
    sql_enum_type: str | None
    database: Database
    by_name: Mapping[str, Any]
    by_ordinal: Mapping[Any, Any]
    required_by_ordinal: Mapping[Any, Any]
    constants: tuple[str, ...]

    @classmethod
    def build(
        cls,
        model: type,
        *,
        required: Mapping[str, Mapping[str, Any]],
        name_attr: str,
        sql_enum_type: str | None,
        database: Database,
        members: Iterable[Any],
        previous: EnumState | None = None,
    ) -> EnumState:
        """Index ``members`` and freeze the result.

        A member whose name and column values match one in ``previous`` is
        replaced by the previous object, so references held across a
        reinitialization stay valid while the row is unchanged.
        """
        indexed: dict[Any, Any] = {}
        for member in members:
            if previous is not None:
                prior = previous.by_name.get(member_key(getattr(member, name_attr)))
                if prior is not None and prior.same_content(member):
                    member = prior
            indexed[ordinal_of(member)] = member

        by_ordinal = dict(sorted(indexed.items(), key=lambda item: item[0]))
        by_name = {member_key(getattr(m, name_attr)): m for m in by_ordinal.values()}
        required_by_ordinal = {
            ordinal: member
            for ordinal, member in by_ordinal.items()
            if member_key(getattr(member, name_attr)) in required
        }

        for member in by_ordinal.values():
            freeze_member(member)

        return cls(
            model=model,
            required_members=MappingProxyType(
                {name: MappingProxyType(dict(attrs)) for name, attrs in required.items()}
            ),
            name_attr=name_attr,
            sql_enum_type=sql_enum_type,
            database=database,
            by_name=MappingProxyType(by_name),
            by_ordinal=MappingProxyType(by_ordinal),
            required_by_ordinal=MappingProxyType(required_by_ordinal),
            constants=tuple(constant_identifier(name) for name in required),
        )

    def is_active(self, member: Any) -> bool:
        return ordinal_of(member) in self.required_by_ordinal

    @property
    def required_values(self) -> list[Any]:
        """Required members in declaration order."""
        return [self.by_name[name] for name in self.required_members if name in self.by_name]
