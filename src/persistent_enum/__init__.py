"""persistent-enum: database rows as constant-like enum members."""

from persistent_enum.config import PersistentEnumConfig, load_config
from persistent_enum.core import (
    FrozenMemberError,
    MissingAttributesError,
    NotInitializedError,
    PersistentEnumError,
    ReadOnlyMemberError,
    UnknownMemberError,
    UnresolvableTypeError,
    UnsafeInitializationError,
    configure_logging,
)
from persistent_enum.db import Database
from persistent_enum.enum import (
    EnumMember,
    EnumRegistry,
    EnumState,
    MemberBuilder,
    acts_as_enum,
    cache_constants,
    constant_identifier,
    discard_enum,
    reinitialize_acts_as_enum,
)

__version__ = "0.1.0"

__all__ = [
    "acts_as_enum",
    "reinitialize_acts_as_enum",
    "discard_enum",
    "cache_constants",
    "constant_identifier",
    "configure_logging",
    "load_config",
    "Database",
    "EnumMember",
    "EnumRegistry",
    "EnumState",
    "MemberBuilder",
    "PersistentEnumConfig",
    "PersistentEnumError",
    "FrozenMemberError",
    "MissingAttributesError",
    "NotInitializedError",
    "ReadOnlyMemberError",
    "UnknownMemberError",
    "UnresolvableTypeError",
    "UnsafeInitializationError",
]
