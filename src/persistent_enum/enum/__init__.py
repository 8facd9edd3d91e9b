"""Persisted enumerations over SQLModel tables."""

from persistent_enum.enum.acts_as_enum import (
    acts_as_enum,
    discard_enum,
    reinitialize_acts_as_enum,
)
from persistent_enum.enum.builder import MemberBuilder, normalize_required
from persistent_enum.enum.materializer import cache_constants, materialize
from persistent_enum.enum.member import EnumMember
from persistent_enum.enum.names import constant_identifier
from persistent_enum.enum.registry import EnumRegistry, resolve_type_name, type_name
from persistent_enum.enum.state import EnumState

__all__ = [
    "acts_as_enum",
    "reinitialize_acts_as_enum",
    "discard_enum",
    "cache_constants",
    "materialize",
    "constant_identifier",
    "normalize_required",
    "EnumMember",
    "EnumRegistry",
    "EnumState",
    "MemberBuilder",
    "resolve_type_name",
    "type_name",
]
