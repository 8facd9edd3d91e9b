"""EnumMember mixin: member behaviour and the class-level lookup API.

Mix into a SQLModel table class ahead of SQLModel:

    class Color(EnumMember, SQLModel, table=True):
        id: int | None = Field(default=None, primary_key=True)
        name: str = Field(unique=True)

After ``acts_as_enum(Color, ["Red", "Green"], db=db)``:

    Color.value_of("Red")       # member or None
    Color.value_of_strict("Red")  # member or UnknownMemberError
    Color.by_ordinal(1)
    Color.values()              # declared members
    Color.all_values()          # declared + legacy rows
    Color.RED                   # constant

Members are shared and frozen. To point a relationship at one, use a
session-local copy:

    paint.color = Color.RED.in_session(session)
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import inspect as sa_inspect

from persistent_enum.core.errors import (
    FrozenMemberError,
    NotInitializedError,
    UnknownMemberError,
)
from persistent_enum.enum.names import constant_identifier, member_key
from persistent_enum.enum.state import EnumState, is_frozen, ordinal_of, state_of


class EnumMember:
    """Row of an enum table.

    Members compare and hash by (type, ordinal), i.e. by row identity.
    """

    def __setattr__(self, name: str, value: Any) -> None:
        if is_frozen(self):
            raise FrozenMemberError.for_attribute(type(self).__name__, name)
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if is_frozen(self):
            raise FrozenMemberError.for_attribute(type(self).__name__, name)
        super().__delattr__(name)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        mine, theirs = self.ordinal, other.ordinal  # type: ignore[attr-defined]
        if mine is None or theirs is None:
            return self is other
        return bool(mine == theirs)

    def __hash__(self) -> int:
        ordinal = self.ordinal
        return hash((type(self), id(self) if ordinal is None else ordinal))

    # Member API

    @property
    def ordinal(self) -> Any:
        return ordinal_of(self)

    @property
    def enum_constant(self) -> str:
        """The stored member name."""
        return member_key(getattr(self, type(self).name_attr()))

    @property
    def constant_name(self) -> str:
        return constant_identifier(self.enum_constant)

    @property
    def active(self) -> bool:
        """Is this member still part of the enum declaration?"""
        return type(self).is_active(self)

    def in_session(self, session: Any) -> Any:
        """Session-local copy of this member, e.g. for relationship assignment.

        The shared member itself cannot be added to a session.
        """
        return session.merge(self, load=False)

    def same_content(self, other: Any) -> bool:
        """True if ``other`` is the same type with equal values in every column."""
        if type(other) is not type(self):
            return False
        return all(
            getattr(self, prop.key) == getattr(other, prop.key)
            for prop in sa_inspect(type(self)).column_attrs
        )

    # Lookup API

    @classmethod
    def enum_state(cls) -> EnumState | None:
        return state_of(cls)

    @classmethod
    def _current_state(cls) -> EnumState:
        state = state_of(cls)
        if state is None:
            raise NotInitializedError.for_lookup(cls.__name__)
        return state

    @classmethod
    def name_attr(cls) -> str:
        return cls._current_state().name_attr

    @classmethod
    def by_ordinal(cls, ordinal: Any) -> Any | None:
        return cls._current_state().by_ordinal.get(ordinal)

    @classmethod
    def value_of(cls, name: Any) -> Any | None:
        return cls._current_state().by_name.get(member_key(name))

    with_name = value_of

    @classmethod
    def value_of_strict(cls, name: Any) -> Any:
        member = cls.value_of(name)
        if member is None:
            raise UnknownMemberError.for_name(cls.__name__, member_key(name))
        return member

    @classmethod
    def ordinals(cls) -> frozenset[Any]:
        """Currently active ordinals."""
        return frozenset(cls._current_state().required_by_ordinal)

    @classmethod
    def values(cls) -> list[Any]:
        """Currently active members."""
        return list(cls._current_state().required_by_ordinal.values())

    @classmethod
    def all_ordinals(cls) -> frozenset[Any]:
        """All ordinals, including those of inactive members."""
        return frozenset(cls._current_state().by_ordinal)

    @classmethod
    def all_values(cls) -> list[Any]:
        """All members, including inactive ones."""
        return list(cls._current_state().by_ordinal.values())

    @classmethod
    def is_active(cls, member: Any) -> bool:
        return cls._current_state().is_active(member)
