"""Fluent declaration of required members."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from persistent_enum.enum.names import member_key

MemberDeclaration = Iterable[Any] | Mapping[Any, Mapping[str, Any] | None]


class MemberBuilder:
    """Collects required members in declaration order.

    Example:
        members = (
            MemberBuilder()
            .add("One", count=1)
            .add("Two", count=2)
            .constant("Three", {"count": 3})
        )
        acts_as_enum(Counter, members, db=db)

    Declaring a name twice keeps its first position and the latest attributes.
    """

    def __init__(self) -> None:
        self._members: dict[str, dict[str, Any]] = {}

    def add(self, name: Any, **attributes: Any) -> MemberBuilder:
        self._members[member_key(name)] = dict(attributes)
        return self

    def constant(self, name: Any, attributes: Mapping[str, Any] | None = None) -> MemberBuilder:
        return self.add(name, **dict(attributes or {}))

    def build(self) -> dict[str, dict[str, Any]]:
        return {name: dict(attrs) for name, attrs in self._members.items()}

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return f"MemberBuilder({list(self._members)!r})"


def normalize_required(
    required: MemberDeclaration | MemberBuilder | None,
    builder: MemberBuilder | None = None,
) -> dict[str, dict[str, Any]]:
    """Resolve any accepted declaration form into an ordered name -> attributes map.

    Accepts a sequence of names, a mapping of name to attributes (or None),
    or a MemberBuilder. Builder members are appended after ``required``.
    """
    result: dict[str, dict[str, Any]] = {}
    if isinstance(required, MemberBuilder):
        result.update(required.build())
    elif isinstance(required, Mapping):
        for name, attrs in required.items():
            result[member_key(name)] = dict(attrs or {})
    elif isinstance(required, str):
        result[required] = {}
    elif required is not None:
        for name in required:
            result[member_key(name)] = {}
    if builder is not None:
        result.update(builder.build())
    return result
